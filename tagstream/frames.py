# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>

"""Frame records and decoding of frame payloads.

Nothing in here is used by the parser itself; these classes turn the raw
payloads it delivers into something more useful.
"""

from tagstream.errors import *
from tagstream.specs import *

class Frame:
    "A frame with an uninterpreted payload."
    _framespec = (BinaryDataSpec("data"),)

    def __init__(self, frameid=None, flags=0, **kwargs):
        self.frameid = frameid if frameid else type(self).__name__
        self.flags = flags
        for spec in self._framespec:
            setattr(self, spec.name, kwargs.get(spec.name, None))

    def __eq__(self, other):
        return (isinstance(other, type(self))
                and self.frameid == other.frameid
                and self.flags == other.flags
                and all(getattr(self, spec.name, None) ==
                        getattr(other, spec.name, None)
                        for spec in self._framespec))

    @classmethod
    def _from_data(cls, frameid, data, flags=0):
        frame = cls(frameid=frameid, flags=flags)
        for spec in frame._framespec:
            val, data = spec.read(frame, data)
            setattr(frame, spec.name, val)
        return frame

    def __repr__(self):
        stype = type(self).__name__
        args = []
        if stype != self.frameid:
            args.append("frameid={0!r}".format(self.frameid))
        if self.flags:
            args.append("flags=0x{0:04X}".format(self.flags))
        for spec in self._framespec:
            if isinstance(spec, BinaryDataSpec):
                data = getattr(self, spec.name)
                if isinstance(data, (bytes, bytearray)):
                    args.append("{0}=<{1} bytes of binary data {2!r}{3}>".format(
                            spec.name, len(data),
                            data[:20], "..." if len(data) > 20 else ""))
                else:
                    args.append(repr(data))
            else:
                args.append("{0}={1!r}".format(spec.name, getattr(self, spec.name)))
        return "{0}({1})".format(stype, ", ".join(args))

    def _str_fields(self):
        fields = []
        for spec in self._framespec:
            fields.append(spec.to_str(getattr(self, spec.name, None)))
        return ", ".join(fields)

    def __str__(self):
        flag = " "
        if isinstance(self, ErrorFrame): flag = "!"
        return "{0}{1}({2})".format(flag, self.frameid, self._str_fields())

class ErrorFrame(Frame):
    "A frame whose payload could not be decoded."
    def __init__(self, frameid, data, exception, flags=0, **kwargs):
        super().__init__(frameid=frameid, flags=flags, **kwargs)
        self.data = data
        self.exception = exception

    def _str_fields(self):
        strs = ["ERROR"]
        if self.exception:
            strs.append(str(self.exception))
        strs.append(repr(self.data))
        return ", ".join(strs)

class TextFrame(Frame):
    _framespec = (EncodingSpec("encoding"),
                  SequenceSpec("text", EncodedStringSpec("text")))

    def _str_fields(self):
        return "{0} {1}".format((EncodedStringSpec._encodings[self.encoding][0]
                                if self.encoding is not None else "<undef>"),
                                ", ".join(repr(t) for t in self.text))

class APIC(Frame):
    "Attached picture"
    _framespec = (EncodingSpec("encoding"),
                  NullTerminatedStringSpec("mime"),
                  ByteSpec("type"),
                  EncodedStringSpec("desc"),
                  BinaryDataSpec("data"))

    def _str_fields(self):
        return "{0}({1}), desc={2}, mime={3}: {4} bytes of image data".format(
            self.type, picture_type_name(self.type),
            repr(self.desc), repr(self.mime), len(self.data))

class PIC(Frame):
    "Attached picture (ID3v2.2)"
    _framespec = (EncodingSpec("encoding"),
                  SimpleStringSpec("format", 3),
                  ByteSpec("type"),
                  EncodedStringSpec("desc"),
                  BinaryDataSpec("data"))

    @property
    def mime(self):
        if self.format.upper() == "PNG":
            return "image/png"
        if self.format.upper() == "JPG":
            return "image/jpeg"
        return "image/" + self.format.strip().lower()

    def _str_fields(self):
        return "{0}({1}), desc={2}, format={3}: {4} bytes of image data".format(
            self.type, picture_type_name(self.type),
            repr(self.desc), repr(self.format), len(self.data))


# Attached picture (APIC & PIC) types
picture_types = (
    "Other", "32x32 icon", "Other icon", "Front Cover", "Back Cover",
    "Leaflet", "Media", "Lead artist", "Artist", "Conductor",
    "Band/Orchestra", "Composer", "Lyricist/text writer",
    "Recording Location", "Recording", "Performance", "Screen capture",
    "A bright coloured fish", "Illustration", "Band/artist",
    "Publisher/Studio")

def picture_type_name(type):
    if 0 <= type < len(picture_types):
        return picture_types[type]
    return "Unknown"

_picture_frames = {
    "APIC": APIC,
    "PIC": PIC,
    }

def frame_from_data(frameid, data, flags=0):
    """Decode the payload of a frame into a frame object.

    Attached pictures and text frames get decoded; everything else is
    returned as a plain Frame.  Payloads that fail to decode produce an
    ErrorFrame instead of an exception.
    """
    try:
        if frameid in _picture_frames:
            return _picture_frames[frameid]._from_data(frameid, data, flags)
        elif frameid.startswith("T") and frameid not in ("TXXX", "TXX"):
            return TextFrame._from_data(frameid, data, flags)
        else:
            return Frame._from_data(frameid, data, flags)
    except (FrameError, ValueError, EOFError) as e:
        return ErrorFrame(frameid, bytes(data), e, flags=flags)
