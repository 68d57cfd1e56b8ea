#!/usr/bin/env python3
# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>

import unittest
import warnings

import tagstream

import test_conversion
import test_parser
import test_frames
import test_reader
import test_fileutil
import test_commandline

suite = unittest.TestSuite()
suite.addTest(test_conversion.suite)
suite.addTest(test_parser.suite)
suite.addTest(test_frames.suite)
suite.addTest(test_reader.suite)
suite.addTest(test_fileutil.suite)
suite.addTest(test_commandline.suite)

if __name__ == "__main__":
    warnings.simplefilter("always", tagstream.Warning)
    unittest.main(defaultTest="suite")
