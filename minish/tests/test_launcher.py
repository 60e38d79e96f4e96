"""
Process Launcher Tests

These tests fork real children, so they need /bin/echo, /bin/sleep
and /bin/sh.
"""

import os
import tempfile
import time
import unittest
from unittest import mock

from minish.exceptions import ForkError
from minish.process import ChildSet, ProcessLauncher, EXIT_EXEC_FAILURE


HAS_TOOLS = all(
    os.access(f'/bin/{tool}', os.X_OK) for tool in ('echo', 'sleep', 'sh')
)


@unittest.skipUnless(HAS_TOOLS, "requires /bin/echo, /bin/sleep and /bin/sh")
class TestLaunch(unittest.TestCase):
    """Test serial launches and output redirection."""

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.launcher = ProcessLauncher('/bin')

    def tearDown(self):
        self._tmp.cleanup()

    def _path(self, name: str) -> str:
        return os.path.join(self._tmp.name, name)

    def test_redirect_stdout_to_file(self):
        target = self._path('out.txt')

        self.launcher.launch(['echo', 'hi'], '/bin', redirect_to=target)

        with open(target) as f:
            self.assertEqual(f.read(), 'hi\n')

    def test_redirect_includes_stderr(self):
        target = self._path('both.txt')

        self.launcher.launch(
            ['sh', '-c', 'echo out; echo err >&2'], '/bin', redirect_to=target
        )

        with open(target) as f:
            self.assertEqual(sorted(f.read().split()), ['err', 'out'])

    def test_redirect_truncates_existing_file(self):
        target = self._path('out.txt')
        with open(target, 'w') as f:
            f.write("old contents that are much longer\n")

        self.launcher.launch(['echo', 'new'], '/bin', redirect_to=target)

        with open(target) as f:
            self.assertEqual(f.read(), 'new\n')

    def test_redirect_creates_owner_only_file(self):
        target = self._path('fresh.txt')
        old_umask = os.umask(0)
        try:
            self.launcher.launch(['echo', 'x'], '/bin', redirect_to=target)
        finally:
            os.umask(old_umask)

        self.assertEqual(os.stat(target).st_mode & 0o777, 0o700)

    def test_serial_launch_waits(self):
        """A serial launch returns only after the child has exited."""
        started = time.monotonic()
        pid = self.launcher.launch(['sleep', '0.3'], '/bin')

        self.assertGreaterEqual(time.monotonic() - started, 0.25)
        with self.assertRaises(ChildProcessError):
            os.waitpid(pid, os.WNOHANG)

    def test_child_path_prefers_system_bin(self):
        env = self.launcher.child_environment('/opt/tools')
        self.assertEqual(env['PATH'], '/bin:/opt/tools')

    def test_fork_failure_raises(self):
        with mock.patch('minish.process.launcher.os.fork',
                        side_effect=BlockingIOError(11, 'Resource temporarily unavailable')):
            with self.assertRaises(ForkError):
                self.launcher.launch(['echo', 'hi'], '/bin')


@unittest.skipUnless(HAS_TOOLS, "requires /bin/echo, /bin/sleep and /bin/sh")
class TestChildFailure(unittest.TestCase):
    """A child that cannot exec exits on its own and never returns."""

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.launcher = ProcessLauncher('/nonexistent-system-bin')

    def tearDown(self):
        self._tmp.cleanup()

    def test_exec_failure_exits_child(self):
        children = ChildSet()
        parent = os.getpid()

        self.launcher.launch(['no-such-program-minish'], self._tmp.name, children=children)

        # Only the parent gets here
        self.assertEqual(os.getpid(), parent)
        reaped = children.join()
        self.assertEqual(len(reaped), 1)
        self.assertEqual(reaped[0][1], EXIT_EXEC_FAILURE)

    def test_redirect_open_failure_exits_child(self):
        children = ChildSet()
        target = os.path.join(self._tmp.name, 'missing-dir', 'out.txt')

        ProcessLauncher('/bin').launch(['echo', 'hi'], '/bin', redirect_to=target, children=children)

        reaped = children.join()
        self.assertEqual(reaped[0][1], EXIT_EXEC_FAILURE)
        self.assertFalse(os.path.exists(target))

    def _join_capturing_stderr(self, launcher, argv, redirect_to=None):
        """Launch into a batch and collect what the child wrote to fd 2."""
        children = ChildSet()
        saved = os.dup(2)
        with tempfile.TemporaryFile() as tmp:
            os.dup2(tmp.fileno(), 2)
            try:
                launcher.launch(argv, '/bin', redirect_to=redirect_to, children=children)
                reaped = children.join()
            finally:
                os.dup2(saved, 2)
                os.close(saved)
            tmp.seek(0)
            return reaped, tmp.read()

    def test_unencodable_argv_reports_error(self):
        reaped, err = self._join_capturing_stderr(self.launcher, ['echo\x00x'])

        self.assertEqual(reaped[0][1], EXIT_EXEC_FAILURE)
        self.assertIn(b"An error has occurred", err)

    @unittest.skipUnless(HAS_TOOLS, "requires /bin/echo")
    def test_unencodable_redirect_target_reports_error(self):
        reaped, err = self._join_capturing_stderr(
            ProcessLauncher('/bin'), ['echo', 'hi'], redirect_to='out\x00.txt'
        )

        self.assertEqual(reaped[0][1], EXIT_EXEC_FAILURE)
        self.assertIn(b"An error has occurred", err)


@unittest.skipUnless(HAS_TOOLS, "requires /bin/echo, /bin/sleep and /bin/sh")
class TestChildSet(unittest.TestCase):
    """Test the parallel batch join barrier."""

    def setUp(self):
        self.launcher = ProcessLauncher('/bin')

    def test_parallel_children_overlap(self):
        children = ChildSet()
        started = time.monotonic()

        self.launcher.launch(['sleep', '1'], '/bin', children=children)
        self.launcher.launch(['sleep', '1'], '/bin', children=children)
        self.assertEqual(children.outstanding, 2)

        reaped = children.join()
        elapsed = time.monotonic() - started

        self.assertEqual(len(reaped), 2)
        self.assertEqual(children.outstanding, 0)
        self.assertGreaterEqual(elapsed, 0.9)
        self.assertLess(elapsed, 1.8)

    def test_join_accepts_any_completion_order(self):
        """The child launched last finishes first."""
        children = ChildSet()
        slow = self.launcher.launch(['sleep', '0.6'], '/bin', children=children)
        fast = self.launcher.launch(['sleep', '0.1'], '/bin', children=children)

        reaped = [pid for pid, _ in children.join()]

        self.assertEqual(reaped, [fast, slow])
        self.assertEqual(children.pids, frozenset())

    def test_empty_join_returns_immediately(self):
        self.assertEqual(ChildSet().join(), [])

    def test_join_stops_when_no_children_exist(self):
        children = ChildSet()
        children.add(999999)

        with mock.patch('minish.process.child_set.os.wait', side_effect=ChildProcessError):
            self.assertEqual(children.join(), [])
        self.assertEqual(children.outstanding, 0)


if __name__ == '__main__':
    unittest.main()
