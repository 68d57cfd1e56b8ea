# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>

import tagstream.parser
import tagstream.frames
import tagstream.reader

from tagstream.errors import *
from tagstream.parser import TagParser, TagHeader, State, FeedResult
from tagstream.frames import Frame, ErrorFrame, TextFrame, APIC, PIC, frame_from_data
from tagstream.reader import iter_frames, read_frames, decode_frames

version = (0, 1, 0)
versionstr = ".".join((str(v) for v in version))
