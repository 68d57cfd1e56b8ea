# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>

"""Helpers for building ID3v2 tags in tests."""

from tagstream.conversion import Syncsafe, Int8

def frame(version, frameid, data, flags=0):
    "Return the bytes of a frame with the given id and payload."
    if version == 2:
        return frameid.encode("ASCII") + Int8.encode(len(data), width=3) + data
    if version == 4:
        size = Syncsafe.encode(len(data), width=4)
    else:
        size = Int8.encode(len(data), width=4)
    return frameid.encode("ASCII") + size + Int8.encode(flags, width=2) + data

def ext_header(version, content, size=None):
    "Return an extended header whose declared size includes its size field."
    if size is None:
        size = len(content) + 4
    if version == 4:
        return Syncsafe.encode(size, width=4) + content
    return Int8.encode(size, width=4) + content

def tag(version, frames, padding=0, flags=0, extended=b"", size=None):
    "Return a complete tag; size overrides the declared tag size."
    body = extended + b"".join(frames) + b"\x00" * padding
    if size is None:
        size = len(body)
    return b"ID3" + bytes([version, 0, flags]) + Syncsafe.encode(size, width=4) + body

def chunked(data, sizes):
    "Split data into consecutive chunks of the given sizes; the rest goes last."
    chunks = []
    pos = 0
    for size in sizes:
        chunks.append(data[pos:pos + size])
        pos += size
    if pos < len(data):
        chunks.append(data[pos:])
    return chunks

def random_chunks(data, rnd, maxsize=16):
    "Split data randomly, keeping the ID3 signature inside the first chunk."
    first = rnd.randint(3, min(len(data), maxsize + 3))
    chunks = [data[:first]]
    pos = first
    while pos < len(data):
        size = rnd.randint(1, maxsize)
        chunks.append(data[pos:pos + size])
        pos += size
    return chunks


class Collector:
    "A frame callback that remembers what it received."
    def __init__(self):
        self.frames = []

    def __call__(self, frameid, payload, length):
        self.frames.append((frameid, bytes(payload), length))


PNG_DATA = b"\x89PNG\r\n\x1a\n" + bytes(range(40))
JPEG_DATA = b"\xff\xd8\xff\xe0" + bytes(range(255, 200, -1))

APIC_PAYLOAD = b"\x00image/png\x00\x03Cover\x00" + PNG_DATA
PIC_PAYLOAD = b"\x00JPG\x03Cover\x00" + JPEG_DATA

def sample_tag(version, padding=32, flags=0, extended=b""):
    "A small tag with two text frames and an attached picture."
    if version == 2:
        frames = [frame(2, "TT2", b"\x00tt2"),
                  frame(2, "TP1", b"\x00tp1"),
                  frame(2, "PIC", PIC_PAYLOAD)]
    else:
        frames = [frame(version, "TIT2", b"\x00tit2"),
                  frame(version, "TPE1", b"\x03tpe1 \xc3\xa9"),
                  frame(version, "APIC", APIC_PAYLOAD)]
    return tag(version, frames, padding=padding, flags=flags, extended=extended)

def sample_frames(version):
    "The (frameid, payload, length) triples expected from sample_tag(version)."
    if version == 2:
        return [("TT2", b"\x00tt2", 4),
                ("TP1", b"\x00tp1", 4),
                ("PIC", PIC_PAYLOAD, len(PIC_PAYLOAD))]
    return [("TIT2", b"\x00tit2", 5),
            ("TPE1", b"\x03tpe1 \xc3\xa9", 8),
            ("APIC", APIC_PAYLOAD, len(APIC_PAYLOAD))]
