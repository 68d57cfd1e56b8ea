# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>

"""Field specifications for decoding frame payloads.

Each spec reads one field from the start of a payload and returns the
decoded value together with the rest of the data.  Specs only ever read;
this package does not write tags.
"""

import abc

from abc import abstractmethod

from tagstream.errors import *

# The idea for the Spec system comes from Mutagen.

class Spec(metaclass=abc.ABCMeta):
    def __init__(self, name):
        self.name = name

    @abstractmethod
    def read(self, frame, data): pass

    def to_str(self, value):
        return "{0}={1}".format(self.name, repr(value))

class ByteSpec(Spec):
    def read(self, frame, data):
        if len(data) < 1:
            raise EOFError()
        return data[0], data[1:]

class BinaryDataSpec(Spec):
    def read(self, frame, data):
        return bytes(data), bytes()
    def to_str(self, value):
        return '{0}={1}{2}'.format(self.name, value[0:16], "..." if len(value) > 16 else "")

class SimpleStringSpec(Spec):
    def __init__(self, name, length):
        super().__init__(name)
        self.length = length
    def read(self, frame, data):
        if len(data) < self.length:
            raise EOFError()
        return bytes(data[:self.length]).decode('iso-8859-1'), data[self.length:]

class NullTerminatedStringSpec(Spec):
    def read(self, frame, data):
        rawstr, sep, data = bytes(data).partition(b"\x00")
        return rawstr.decode('iso-8859-1'), data

class EncodingSpec(ByteSpec):
    "EncodingSpec must be the first spec."
    def read(self, frame, data):
        enc, data = super().read(frame, data)
        if enc & 0xFC:
            raise FrameError("Invalid encoding 0x{0:X}".format(enc))
        return enc, data
    def to_str(self, value):
        return EncodedStringSpec._encodings[value][0]

class EncodedStringSpec(Spec):
    _encodings = (('iso-8859-1', b"\x00"),
                  ('utf-16', b"\x00\x00"),
                  ('utf-16-be', b"\x00\x00"),
                  ('utf-8', b"\x00"))

    def read(self, frame, data):
        enc, term = self._encodings[frame.encoding]
        data = bytes(data)
        if len(term) == 1:
            rawstr, sep, data = data.partition(term)
        else:
            index = len(data)
            for i in range(0, len(data), 2):
                if data[i:i+2] == term:
                    index = i
                    break
            if index & 1:
                raise EOFError()
            rawstr = data[:index]
            data = data[index+2:]
        return rawstr.decode(enc), data

class SequenceSpec(Spec):
    """Recognizes a sequence of values, all of the same spec."""
    def __init__(self, name, spec):
        super().__init__(name)
        self.spec = spec

    def read(self, frame, data):
        "Returns a list of values, eats all of data."
        seq = []
        while data:
            elem, data = self.spec.read(frame, data)
            seq.append(elem)
        return seq, data
