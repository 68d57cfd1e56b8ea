# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>

"""The tagstream command: list the ID3v2 frames of audio files."""

import argparse
import os.path
import sys

import tagstream
from tagstream.errors import *
from tagstream.frames import APIC, PIC, frame_from_data
from tagstream.parser import TagParser, FeedResult, State
from tagstream.reader import DEFAULT_CHUNK_SIZE
from tagstream.util import verb, print_warnings
import tagstream.fileutil as fileutil

_extensions = {
    "image/jpeg": "jpg",
    "image/jpg": "jpg",
    "image/png": "png",
    "image/gif": "gif",
    }

def picture_filename(directory, filename, index, frame):
    base = os.path.splitext(os.path.basename(filename))[0]
    ext = _extensions.get(frame.mime.lower(), "bin")
    return os.path.join(directory, "{0}-{1}.{2}".format(base, index, ext))

def list_frames(filename, options, out=None):
    """Print the frames of the tag in filename as they are decoded.

    Returns the number of frames found.
    """
    out = out if out is not None else sys.stdout
    count = 0
    def frame_received(frameid, payload, length):
        nonlocal count
        count += 1
        frame = frame_from_data(frameid, bytes(payload), parser.pending_frame.flags)
        print(frame, file=out)
        if options.pictures and isinstance(frame, (APIC, PIC)):
            path = picture_filename(options.pictures, filename, count, frame)
            with open(path, "wb") as file:
                file.write(frame.data)
            verb(options.verbose, "{0}: wrote {1} bytes".format(path, len(frame.data)),
                 file=out)

    print(filename, file=out)
    with TagParser(frame_received) as parser, \
            fileutil.opened(filename, "rb") as file:
        for chunk in fileutil.read_chunks(file, options.chunk_size):
            had_header = parser.header is not None
            result = parser.feed(chunk)
            if not had_header and parser.header is not None:
                verb(options.verbose, parser.header, file=out)
            if result is FeedResult.ERROR:
                raise FrameAllocationError("Out of memory allocating frame buffer")
            if result is FeedResult.COMPLETE:
                break
        if parser.state is State.FIND_HEADER:
            raise NoTagError("ID3v2 tag not found")
        verb(options.verbose, "{0} frames, tag ends at offset {1}"
             .format(count, parser.position), file=out)
    return count

def make_option_parser():
    parser = argparse.ArgumentParser(
        prog="tagstream",
        description="List the ID3v2 frames of audio files, reading them "
        "incrementally in fixed-size chunks.")
    parser.add_argument("files", nargs="+", metavar="FILE")
    parser.add_argument("--version", action="version",
                        version="%(prog)s " + tagstream.versionstr)
    parser.add_argument("-c", "--chunk-size", type=int, dest="chunk_size",
                        default=DEFAULT_CHUNK_SIZE, metavar="N",
                        help="read files N bytes at a time (default: %(default)s)")
    parser.add_argument("-p", "--pictures", metavar="DIR",
                        help="save attached pictures into DIR")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="print tag header details")
    parser.add_argument("-q", "--quiet", action="store_true",
                        help="don't print warnings")
    return parser

def main(argv=None):
    parser = make_option_parser()
    options = parser.parse_args(argv)
    if options.chunk_size <= 0:
        parser.error("chunk size must be positive")
    if options.pictures and not os.path.isdir(options.pictures):
        parser.error("{0} is not a directory".format(options.pictures))

    status = 0
    for filename in options.files:
        with print_warnings(filename, options):
            try:
                list_frames(filename, options)
            except NoTagError:
                print("{0}: no ID3v2 tag".format(filename), file=sys.stderr)
                status = 1
            except (EnvironmentError, FrameAllocationError) as e:
                print("{0}: {1}".format(filename, e), file=sys.stderr)
                status = 1
    return status

if __name__ == "__main__":
    sys.exit(main())
