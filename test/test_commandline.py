# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>

import unittest
import contextlib
import io
import os
import os.path
import shutil
import tempfile

from tagstream.commandline import *

from tagdata import *

class CommandlineTestCase(unittest.TestCase):
    def setUp(self):
        self.dir = tempfile.mkdtemp(prefix="tagstreamtest-")

    def tearDown(self):
        shutil.rmtree(self.dir)

    def write(self, name, data):
        filename = os.path.join(self.dir, name)
        with open(filename, "wb") as file:
            file.write(data)
        return filename

    def options(self, *args):
        return make_option_parser().parse_args(list(args) + [os.devnull])

    def testListFrames(self):
        filename = self.write("song.mp3", sample_tag(3) + b"\xff\xfb" * 100)
        out = io.StringIO()
        count = list_frames(filename, self.options("-c", "5", "-v"), out=out)
        self.assertEqual(count, 3)
        lines = out.getvalue().splitlines()
        self.assertEqual(lines[0], filename)
        self.assertEqual(lines[1], "ID3v2.3.0 tag, {0} bytes".format(len(sample_tag(3)) - 10))
        self.assertEqual(lines[2], " TIT2(iso-8859-1 'tit2')")
        self.assertEqual(lines[3], " TPE1(utf-8 'tpe1 é')")
        self.assertTrue(lines[4].startswith(" APIC(3(Front Cover)"))
        self.assertTrue(lines[5].startswith("3 frames"))

    def testSavePictures(self):
        filename = self.write("song.mp3", sample_tag(2))
        pictures = os.path.join(self.dir, "pictures")
        os.mkdir(pictures)
        out = io.StringIO()
        list_frames(filename, self.options("-p", pictures), out=out)
        with open(os.path.join(pictures, "song-3.jpg"), "rb") as file:
            self.assertEqual(file.read(), JPEG_DATA)

    def testMain(self):
        good = self.write("good.mp3", sample_tag(4))
        bad = self.write("bad.mp3", b"\xff\xfb" * 100)
        missing = os.path.join(self.dir, "missing.mp3")
        with contextlib.redirect_stdout(io.StringIO()), \
                contextlib.redirect_stderr(io.StringIO()) as err:
            self.assertEqual(main(["-q", good]), 0)
            self.assertEqual(main([good, bad]), 1)
            self.assertEqual(main([missing]), 1)
        self.assertIn("bad.mp3: no ID3v2 tag", err.getvalue())

    def testWarningsArePrinted(self):
        filename = self.write("odd.mp3", tag(3, [frame(3, "tit2", b"\x00a")]))
        with contextlib.redirect_stdout(io.StringIO()), \
                contextlib.redirect_stderr(io.StringIO()) as err:
            self.assertEqual(main([filename]), 0)
        self.assertIn(filename + ":warning: Invalid frame id b'tit2'", err.getvalue())

        with contextlib.redirect_stdout(io.StringIO()), \
                contextlib.redirect_stderr(io.StringIO()) as err:
            self.assertEqual(main(["--quiet", filename]), 0)
        self.assertEqual(err.getvalue(), "")

    def testUsageErrors(self):
        with contextlib.redirect_stderr(io.StringIO()):
            for args in [], ["-c", "0", "file"], ["-p", os.path.join(self.dir, "nope"), "file"]:
                with self.assertRaises(SystemExit) as cm:
                    main(args)
                self.assertEqual(cm.exception.code, 2)

suite = unittest.TestLoader().loadTestsFromTestCase(CommandlineTestCase)

if __name__ == "__main__":
    unittest.main(defaultTest="suite")
