# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>

import warnings
import sys
from contextlib import contextmanager

def verb(verbose, *args, **kwargs):
    if verbose:
        print(*args, **kwargs)

@contextmanager
def print_warnings(filename, options):
    with warnings.catch_warnings(record=True) as ws:
        warnings.simplefilter("always")
        try:
            yield None
        finally:
            if not options.quiet and len(ws) > 0:
                for w in ws:
                    print(filename + ":warning: " + str(w.message),
                          file=sys.stderr)
            sys.stderr.flush()
