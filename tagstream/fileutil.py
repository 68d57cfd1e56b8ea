# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>

"""File manipulation utilities."""

from contextlib import contextmanager

@contextmanager
def opened(filename, mode):
    "Open filename, or do nothing if filename is already an open file object"
    if isinstance(filename, str):
        file = open(filename, mode)
        try:
            yield file
        finally:
            if not file.closed:
                file.close()
    else:
        yield filename

def read_chunks(file, size):
    "Generate successive chunks of at most size bytes from file, until EOF."
    if size <= 0:
        raise ValueError("Chunk size must be positive")
    while True:
        chunk = file.read(size)
        if not chunk:
            return
        yield chunk
