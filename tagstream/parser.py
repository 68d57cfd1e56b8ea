# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>

"""Incremental ID3v2 tag parser.

TagParser accepts an ID3v2.2, 2.3 or 2.4 tag in pieces of any size and
alignment, and reports each frame through a callback as soon as its payload
is complete:

    def frame_received(frameid, payload, length):
        print(frameid, bytes(payload))

    with TagParser(frame_received) as parser:
        while parser.feed(file.read(512)) is FeedResult.NEED_MORE_DATA:
            pass

The parser never reads from a file itself; everything it needs to resume in
the middle of a header or a payload is kept in its own counters.
"""

import collections
import enum
import re
from warnings import warn

from tagstream.errors import *
from tagstream.conversion import Syncsafe, Int8

SIGNATURE = b"ID3"
HEADER_SIZE = 10
EXT_SIZE_FIELD = 4

_TAG_UNSYNCHRONISED = 0x80
_TAG_EXTENDED_HEADER = 0x40
_TAG_EXPERIMENTAL = 0x20
_TAG24_FOOTER = 0x10

# Allow a single space at end of four-character ids
# Some programs (e.g. iTunes 8.2) generate such frames when converting
# from 2.2 to 2.3/2.4 tags.
_FRAME_ID = re.compile(b"^[A-Z][A-Z0-9]{2}[A-Z0-9 ]?$")


class State(enum.Enum):
    FIND_HEADER = 0
    READ_HEADER = 1
    READ_EXT_HEADER = 2
    READ_FRAME_HEADER = 3
    READ_FRAME_DATA = 4
    DONE = 5

class FeedResult(enum.Enum):
    NEED_MORE_DATA = 0
    COMPLETE = 1
    ERROR = -1


class TagHeader(collections.namedtuple("TagHeader", "version revision flags size")):
    """The fixed 10-byte header at the start of every ID3v2 tag.

    size is the decoded tag size, excluding the header itself.
    """
    __slots__ = ()

    @classmethod
    def decode(cls, data):
        return cls(data[3], data[4], data[5], Syncsafe.decode(data[6:10]))

    @property
    def has_extended_header(self):
        return self.version >= 3 and bool(self.flags & _TAG_EXTENDED_HEADER)

    def flag_names(self):
        "Return the set of known header flags that are set for this version."
        names = set()
        if self.flags & _TAG_UNSYNCHRONISED:
            names.add("unsynchronisation")
        if self.version >= 3:
            if self.flags & _TAG_EXTENDED_HEADER:
                names.add("extended_header")
            if self.flags & _TAG_EXPERIMENTAL:
                names.add("experimental")
        if self.version == 4 and self.flags & _TAG24_FOOTER:
            names.add("footer")
        return names

    def __str__(self):
        return "ID3v2.{0}.{1} tag, {2} bytes{3}".format(
            self.version, self.revision, self.size,
            ("({0})".format(", ".join(sorted(self.flag_names())))
             if self.flag_names() else ""))


FrameProgress = collections.namedtuple("FrameProgress", "frameid flags filled size")

class _PendingFrame:
    "A frame whose payload is still being accumulated."
    __slots__ = ("frameid", "size", "flags", "data", "filled")

    def __init__(self, frameid, size, flags, data):
        self.frameid = frameid
        self.size = size
        self.flags = flags
        self.data = data
        self.filled = 0


class TagParser:
    """Resumable ID3v2 tag parser.

    callback(frameid, payload, length) is called once for each complete
    frame, in file order.  payload is a memoryview over the parser's own
    buffer and is released when the callback returns; copy it if you need
    the bytes later.  A callback of None just skips delivery.

    feed() returns FeedResult.NEED_MORE_DATA until the tag has been fully
    consumed, then FeedResult.COMPLETE.  FeedResult.ERROR means a frame
    buffer could not be allocated; the parser must be reset() before it is
    fed again.
    """

    # Decode ID3v2.4 frame sizes as straight 8-bit integers instead of
    # syncsafe ones.  Older versions of iTunes stored them that way.
    ITUNES_WORKAROUND = False

    # ID3v2.3 says the extended header size excludes its own 4-byte size
    # field.  When false, the size field is counted as part of the declared
    # size, like in ID3v2.4.
    EXT_HEADER_SIZE_EXCLUDES_ITSELF = False

    def __init__(self, callback=None):
        self._callback = callback
        self._frame = None
        self.reset()

    def reset(self):
        "Forget all progress and start looking for a new tag."
        self.cleanup()
        self._state = State.FIND_HEADER
        self._scratch = bytearray()
        self._header = None
        self._bytes_processed = 0
        self._ext_size = None
        self._ext_read = 0
        self._position = 0
        self._failed = False

    def cleanup(self):
        "Release the payload buffer of the frame in progress, if any."
        self._frame = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.cleanup()

    def __repr__(self):
        if self._header is None:
            return "<{0}: {1}>".format(type(self).__name__, self._state.name)
        return "<{0}: {1}, {2}/{3} tag bytes>".format(
            type(self).__name__, self._state.name,
            self._bytes_processed, self._header.size)

    @property
    def state(self):
        return self._state

    @property
    def header(self):
        "The decoded TagHeader, or None if it hasn't been read yet."
        return self._header

    @property
    def version(self):
        return self._header.version if self._header is not None else None

    @property
    def tag_size(self):
        return self._header.size if self._header is not None else None

    @property
    def bytes_processed(self):
        "Number of tag bytes consumed after the 10-byte tag header."
        return self._bytes_processed

    @property
    def extended_size(self):
        return self._ext_size

    @property
    def position(self):
        "Total number of input bytes consumed so far."
        return self._position

    @property
    def frame_in_progress(self):
        return self._frame is not None

    @property
    def pending_frame(self):
        frame = self._frame
        if frame is None:
            return None
        return FrameProgress(frame.frameid, frame.flags, frame.filled, frame.size)

    def feed(self, data):
        "Consume the next piece of input and return a FeedResult."
        if self._failed:
            return FeedResult.ERROR
        with memoryview(data).cast("B") as view:
            pos = 0
            while self._state is not State.DONE and not self._failed:
                state = self._state
                newpos = getattr(self, self._handlers[state])(view, pos)
                self._position += newpos - pos
                if newpos == pos and self._state is state:
                    break
                pos = newpos
        if self._failed:
            return FeedResult.ERROR
        if self._state is State.DONE:
            return FeedResult.COMPLETE
        return FeedResult.NEED_MORE_DATA

    def _remaining(self):
        "Number of tag bytes not yet accounted for."
        return max(self._header.size - self._bytes_processed, 0)

    def _fill(self, view, pos, size, counted=True):
        """Move bytes from view[pos:] to the scratch buffer, up to size bytes.

        Counted reads stop at the end of the tag, and charge the bytes
        they take against the tag size.  Returns the new input position.
        """
        count = min(size - len(self._scratch), len(view) - pos)
        if counted:
            count = min(count, self._remaining())
        if count <= 0:
            return pos
        self._scratch += view[pos:pos + count]
        if counted:
            self._bytes_processed += count
        return pos + count

    def _next_frame(self):
        del self._scratch[:]
        if self._remaining() == 0:
            self._finish()
        else:
            self._state = State.READ_FRAME_HEADER

    def _finish(self):
        self._frame = None
        del self._scratch[:]
        self._state = State.DONE

    def _allocate(self, size):
        return bytearray(size)

    def _find_header(self, view, pos):
        # The signature is only recognized if it is entirely inside this
        # chunk; a partial match at the end is skipped.
        index = view[pos:].tobytes().find(SIGNATURE)
        if index < 0:
            return len(view)
        self._scratch[:] = SIGNATURE
        self._state = State.READ_HEADER
        return pos + index + len(SIGNATURE)

    def _read_header(self, view, pos):
        pos = self._fill(view, pos, HEADER_SIZE, counted=False)
        if len(self._scratch) < HEADER_SIZE:
            return pos
        header = TagHeader.decode(self._scratch)
        del self._scratch[:]
        if header.version not in (2, 3, 4):
            warn("Unknown ID3 version: 2.{0}.{1}".format(header.version, header.revision),
                 UnknownVersionWarning)
        self._header = header
        self._bytes_processed = 0
        if header.has_extended_header:
            self._ext_size = None
            self._ext_read = 0
            self._state = State.READ_EXT_HEADER
        else:
            self._next_frame()
        return pos

    def _read_ext_header(self, view, pos):
        if self._ext_size is None:
            pos = self._fill(view, pos, EXT_SIZE_FIELD)
            self._ext_read = len(self._scratch)
            if len(self._scratch) < EXT_SIZE_FIELD:
                if self._remaining() == 0:
                    self._next_frame()
                return pos
            if self._header.version == 4:
                self._ext_size = Syncsafe.decode(self._scratch)
            else:
                self._ext_size = Int8.decode(self._scratch)
                if self._header.version == 3 and self.EXT_HEADER_SIZE_EXCLUDES_ITSELF:
                    self._ext_size += EXT_SIZE_FIELD
            del self._scratch[:]

        count = min(self._ext_size - self._ext_read, len(view) - pos, self._remaining())
        if count > 0:
            pos += count
            self._ext_read += count
            self._bytes_processed += count
        if self._ext_read >= self._ext_size or self._remaining() == 0:
            self._next_frame()
        return pos

    def _read_frame_header(self, view, pos):
        length = HEADER_SIZE if self._header.version >= 3 else 6
        pos = self._fill(view, pos, length)
        if self._scratch[:1] == b"\x00":
            # Padding
            self._finish()
            return pos
        if len(self._scratch) < length:
            if self._remaining() == 0:
                self._finish()
            return pos

        frameid, size, flags = self._decode_frame_header(self._scratch)
        try:
            data = self._allocate(size)
        except MemoryError:
            self._failed = True
            return pos
        del self._scratch[:]
        self._frame = _PendingFrame(frameid, size, flags, data)
        self._state = State.READ_FRAME_DATA
        return pos

    def _decode_frame_header(self, header):
        version = self._header.version
        if version >= 3:
            rawid = bytes(header[0:4])
            if version == 4 and not self.ITUNES_WORKAROUND:
                size = Syncsafe.decode(header[4:8])
            else:
                size = Int8.decode(header[4:8])
            flags = Int8.decode(header[8:10])
        else:
            rawid = bytes(header[0:3])
            size = Int8.decode(header[3:6])
            flags = 0
        rawid = rawid.partition(b"\x00")[0]
        if not _FRAME_ID.match(rawid):
            warn("Invalid frame id {0!r}".format(rawid), InvalidFrameIdWarning)
        return rawid.decode("latin-1"), size, flags

    def _read_frame_data(self, view, pos):
        frame = self._frame
        count = min(frame.size - frame.filled, len(view) - pos, self._remaining())
        if count > 0:
            frame.data[frame.filled:frame.filled + count] = view[pos:pos + count]
            frame.filled += count
            self._bytes_processed += count
            pos += count
        if frame.filled >= frame.size:
            self._deliver(frame)
        elif self._remaining() == 0:
            warn("Frame {0} is truncated: {1} of {2} bytes are inside the tag"
                 .format(frame.frameid, frame.filled, frame.size),
                 TruncatedFrameWarning)
            self._finish()
        return pos

    def _deliver(self, frame):
        try:
            if self._callback is not None:
                with memoryview(frame.data) as payload:
                    self._callback(frame.frameid, payload, frame.size)
        finally:
            self._frame = None
            self._next_frame()

    _handlers = {
        State.FIND_HEADER: "_find_header",
        State.READ_HEADER: "_read_header",
        State.READ_EXT_HEADER: "_read_ext_header",
        State.READ_FRAME_HEADER: "_read_frame_header",
        State.READ_FRAME_DATA: "_read_frame_data",
        }
