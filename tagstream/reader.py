# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>

"""Iterate over the frames of a tag instead of receiving callbacks."""

from warnings import warn

from tagstream.errors import *
from tagstream.frames import Frame
from tagstream.parser import TagParser, FeedResult, State
import tagstream.fileutil as fileutil

DEFAULT_CHUNK_SIZE = 4096

def iter_frames(chunks):
    """Generate the frames of the tag contained in an iterable of byte chunks.

    Frames are yielded in file order, each as a Frame holding a copy of
    the payload.  Chunks after the end of the tag are not consumed.
    """
    pending = []
    def frame_received(frameid, payload, length):
        flags = parser.pending_frame.flags
        pending.append(Frame(frameid=frameid, flags=flags, data=bytes(payload)))

    parser = TagParser(frame_received)
    try:
        for chunk in chunks:
            result = parser.feed(chunk)
            yield from pending
            del pending[:]
            if result is FeedResult.ERROR:
                raise FrameAllocationError("Out of memory allocating frame buffer")
            if result is FeedResult.COMPLETE:
                return
        if parser.state is State.FIND_HEADER:
            raise NoTagError("ID3v2 tag not found")
        warn("Tag is truncated: input ended after {0} of {1} tag bytes"
             .format(parser.bytes_processed, parser.tag_size)
             if parser.header is not None else "Tag header is truncated",
             TagWarning)
    finally:
        parser.cleanup()

def read_frames(filename, chunk_size=DEFAULT_CHUNK_SIZE):
    "Generate the frames of the ID3v2 tag in filename, reading chunk_size bytes at a time."
    with fileutil.opened(filename, "rb") as file:
        yield from iter_frames(fileutil.read_chunks(file, chunk_size))

def decode_frames(data):
    "Return the list of frames in the tag held in data."
    return list(iter_frames([data]))
