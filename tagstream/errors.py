# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>

class Error(Exception): pass

class Warning(Error, UserWarning): pass

class TagWarning(Warning): pass
class UnknownVersionWarning(TagWarning): pass

class FrameWarning(Warning): pass
class TruncatedFrameWarning(FrameWarning): pass
class InvalidFrameIdWarning(FrameWarning): pass

class NoTagError(Error): pass
class FrameError(Error): pass

class FrameAllocationError(Error, MemoryError):
    "Raised when the payload buffer of a frame cannot be allocated."
