#!/usr/bin/env python3
"""
FileSystemOps Unit Tests

Create, copy, delete, enumerate and temp directories, run against the
in-memory backend.

Run with: python -m pytest pathkit/tests -v
"""

import sys
import unittest


def make_ops(**kwargs):
    from pathkit.filesystem.memory_fs import MemoryFileSystem
    from pathkit.filesystem.operations import FileSystemOps

    fs = MemoryFileSystem()
    return FileSystemOps(fs, **kwargs), fs


class TestCreate(unittest.TestCase):
    """Test file and directory creation."""

    def test_create_file(self):
        """Test creating a file in an existing directory."""
        ops, fs = make_ops()

        result = ops.create_file('/myfile')

        self.assertEqual(str(result), '/myfile')
        self.assertTrue(ops.file_exists('/myfile'))
        self.assertEqual(fs.read_bytes('/myfile'), b'')

    def test_create_file_in_missing_directories(self):
        """Test that missing ancestor directories are created."""
        from pathkit.filesystem.path import PathValue

        ops, fs = make_ops()
        target = PathValue('/tmp/not_yet_existing_dir/myotherdir/myfile')

        self.assertEqual(ops.create_file(target), target)
        self.assertTrue(ops.file_exists(target))
        self.assertTrue(ops.directory_exists('/tmp/not_yet_existing_dir/myotherdir'))

    def test_create_file_truncates(self):
        """Test that creating over an existing file empties it."""
        ops, fs = make_ops()
        fs.write_bytes('/data.bin', b'payload')

        ops.create_file('/data.bin')

        self.assertEqual(fs.read_bytes('/data.bin'), b'')

    def test_create_file_on_relative_path(self):
        """Test creating a relative path fails."""
        from pathkit.filesystem.path import PathValue
        from pathkit.exceptions import RelativePathError

        ops, fs = make_ops()
        p = PathValue('mydir/myfile.txt')

        self.assertTrue(p.is_relative)
        with self.assertRaises(RelativePathError) as ctx:
            ops.create_file(p)
        self.assertEqual(ctx.exception.path, 'mydir/myfile.txt')
        self.assertEqual(ctx.exception.operation, 'create_file')

    def test_create_directory(self):
        """Test directory creation is recursive and idempotent."""
        ops, fs = make_ops()

        ops.create_directory('/a/b/c')
        ops.create_directory('/a/b/c')

        self.assertTrue(ops.directory_exists('/a'))
        self.assertTrue(ops.directory_exists('/a/b/c'))

    def test_create_directory_on_relative_path(self):
        """Test creating a relative directory fails."""
        from pathkit.exceptions import RelativePathError

        ops, fs = make_ops()

        with self.assertRaises(RelativePathError):
            ops.create_directory('a/b')

    def test_drive_rooted_paths(self):
        """Test creation under a drive letter root."""
        ops, fs = make_ops()

        ops.create_file('C:/work/out.txt')

        self.assertTrue(ops.file_exists('C:/work/out.txt'))
        self.assertFalse(ops.exists('/work/out.txt'))

    def test_ensure_directory_exists_without_root(self):
        """Test that a backend with no root surfaces EmptyPathError."""
        from pathkit.filesystem.memory_fs import MemoryFileSystem
        from pathkit.filesystem.operations import FileSystemOps
        from pathkit.exceptions import EmptyPathError

        class RootlessFileSystem(MemoryFileSystem):
            def is_dir(self, path):
                return False

        ops = FileSystemOps(RootlessFileSystem())

        with self.assertRaises(EmptyPathError):
            ops.create_file('/a/b')


class TestCopy(unittest.TestCase):
    """Test file and directory tree copies."""

    def test_copy_file(self):
        """Test copying a single file into a new directory."""
        ops, fs = make_ops()
        fs.write_bytes('/src.txt', b'hello')

        ops.copy('/src.txt', '/out/dir/dst.txt')

        self.assertEqual(fs.read_bytes('/out/dir/dst.txt'), b'hello')

    def test_copy_file_overwrites(self):
        """Test copying over an existing file replaces it."""
        ops, fs = make_ops()
        fs.write_bytes('/src.txt', b'new')
        fs.write_bytes('/dst.txt', b'old')

        ops.copy('/src.txt', '/dst.txt')

        self.assertEqual(fs.read_bytes('/dst.txt'), b'new')

    def test_copy_tree(self):
        """Test copying a tree with nested and empty directories."""
        ops, fs = make_ops()
        ops.create_file('/src/a.txt')
        fs.write_bytes('/src/a.txt', b'A')
        ops.create_file('/src/sub/b.txt')
        ops.create_directory('/src/sub/empty')
        ops.create_directory('/src/empty_top')

        ops.copy('/src', '/dst')

        self.assertEqual(fs.read_bytes('/dst/a.txt'), b'A')
        self.assertTrue(ops.file_exists('/dst/sub/b.txt'))
        self.assertTrue(ops.directory_exists('/dst/sub/empty'))
        self.assertTrue(ops.directory_exists('/dst/empty_top'))

        src_layout = sorted(
            str(p.relative_to('/src')) for p in ops.contents('/src', recursive=True)
        )
        dst_layout = sorted(
            str(p.relative_to('/dst')) for p in ops.contents('/dst', recursive=True)
        )
        self.assertEqual(src_layout, dst_layout)

    def test_copy_nested_empty_directory(self):
        """Test a tree whose only content is an empty subdirectory."""
        ops, fs = make_ops()
        ops.create_directory('/src/only/empty')

        ops.copy('/src', '/backup/copy')

        self.assertTrue(ops.directory_exists('/backup/copy/only/empty'))
        self.assertEqual(ops.files('/backup/copy', recursive=True), [])

    def test_copy_with_predicate(self):
        """Test a predicate filters files and prunes directories."""
        ops, fs = make_ops()
        ops.create_file('/src/keep.txt')
        ops.create_file('/src/skip.log')
        ops.create_file('/src/cache/deep/file.txt')

        def accept(dst):
            return not dst.has_extension('log') and dst.file_name != 'cache'

        ops.copy('/src', '/dst', accept)

        self.assertTrue(ops.file_exists('/dst/keep.txt'))
        self.assertFalse(ops.exists('/dst/skip.log'))
        self.assertFalse(ops.exists('/dst/cache'))
        self.assertFalse(ops.exists('/dst/cache/deep/file.txt'))

    def test_predicate_rejecting_root(self):
        """Test that rejecting the top destination copies nothing."""
        ops, fs = make_ops()
        ops.create_file('/src/a.txt')

        ops.copy('/src', '/dst', lambda dst: False)

        self.assertFalse(ops.exists('/dst'))

    def test_copy_relative_paths(self):
        """Test copy refuses relative source or destination."""
        from pathkit.exceptions import RelativePathError

        ops, fs = make_ops()
        ops.create_file('/src.txt')

        with self.assertRaises(RelativePathError):
            ops.copy('src.txt', '/dst.txt')
        with self.assertRaises(RelativePathError):
            ops.copy('/src.txt', 'dst.txt')

    def test_copy_missing_source(self):
        """Test copying a path that does not exist."""
        from pathkit.exceptions import SourceNotFoundError

        ops, fs = make_ops()

        with self.assertRaises(SourceNotFoundError) as ctx:
            ops.copy('/nope', '/dst')
        self.assertEqual(ctx.exception.path, '/nope')


class TestDelete(unittest.TestCase):
    """Test deletion modes."""

    def test_delete_file(self):
        """Test deleting a file."""
        ops, fs = make_ops()
        ops.create_file('/a/file.txt')

        ops.delete('/a/file.txt')

        self.assertFalse(ops.exists('/a/file.txt'))
        self.assertTrue(ops.directory_exists('/a'))

    def test_delete_directory(self):
        """Test deleting a directory tree."""
        ops, fs = make_ops()
        ops.create_file('/a/b/c.txt')

        ops.delete('/a')

        self.assertFalse(ops.exists('/a'))

    def test_delete_relative(self):
        """Test deleting a relative path fails."""
        from pathkit.exceptions import RelativePathError

        ops, fs = make_ops()

        with self.assertRaises(RelativePathError):
            ops.delete('a/b')

    def test_delete_missing(self):
        """Test deleting a path that does not exist."""
        from pathkit.exceptions import NotFoundError

        ops, fs = make_ops()

        with self.assertRaises(NotFoundError):
            ops.delete('/missing')

    def test_delete_locked_directory_normal(self):
        """Test that NORMAL mode propagates removal conflicts."""
        from pathkit.filesystem.operations import DeleteMode

        ops, fs = make_ops()
        ops.create_file('/a/in_use.txt')
        fs.lock('/a/in_use.txt')

        with self.assertRaises(OSError):
            ops.delete('/a', DeleteMode.NORMAL)
        self.assertTrue(ops.file_exists('/a/in_use.txt'))

    def test_delete_locked_directory_soft(self):
        """Test that SOFT mode swallows removal conflicts."""
        from pathkit.filesystem.operations import DeleteMode

        ops, fs = make_ops()
        ops.create_file('/a/in_use.txt')
        fs.lock('/a/in_use.txt')

        ops.delete('/a', DeleteMode.SOFT)

        self.assertTrue(ops.directory_exists('/a'))

        fs.unlock('/a/in_use.txt')
        ops.delete('/a', DeleteMode.SOFT)
        self.assertFalse(ops.exists('/a'))


class TestEnumeration(unittest.TestCase):
    """Test files, directories and contents."""

    def setUp(self):
        self.ops, self.fs = make_ops()
        self.ops.create_file('/root/a.txt')
        self.ops.create_file('/root/b.md')
        self.ops.create_file('/root/sub/c.txt')
        self.ops.create_directory('/root/other')

    def test_files(self):
        """Test top-level file listing."""
        names = [p.file_name for p in self.ops.files('/root')]
        self.assertEqual(names, ['a.txt', 'b.md'])

    def test_files_recursive(self):
        """Test recursive file listing."""
        found = {str(p) for p in self.ops.files('/root', recursive=True)}
        self.assertEqual(found, {'/root/a.txt', '/root/b.md', '/root/sub/c.txt'})

    def test_files_filtered(self):
        """Test the predicate overload."""
        from pathkit.filesystem.path import PathValue

        found = self.ops.files('/root', lambda p: p.has_extension('txt'))
        self.assertEqual(found, [PathValue('/root/a.txt')])

    def test_directories(self):
        """Test directory listing."""
        found = [str(p) for p in self.ops.directories('/root')]
        self.assertEqual(found, ['/root/other', '/root/sub'])

    def test_contents(self):
        """Test contents lists files before directories."""
        found = [p.file_name for p in self.ops.contents('/root')]
        self.assertEqual(found, ['a.txt', 'b.md', 'other', 'sub'])

    def test_results_are_path_values(self):
        """Test listings are absolute PathValues."""
        from pathkit.filesystem.path import PathValue

        for p in self.ops.contents('/root', recursive=True):
            self.assertIsInstance(p, PathValue)
            self.assertFalse(p.is_relative)


class TestTempDirectory(unittest.TestCase):
    """Test temp directory allocation."""

    def test_creates_directory(self):
        """Test a temp directory is created under the temp root."""
        ops, fs = make_ops(temp_root='/tmp', random_source=lambda: 7)

        result = ops.create_temp_directory('build')

        self.assertEqual(str(result), '/tmp/build_7')
        self.assertTrue(ops.directory_exists(result))

    def test_retries_taken_names(self):
        """Test that existing names are skipped."""
        numbers = iter([1, 1, 2, 3])
        ops, fs = make_ops(temp_root='/tmp', random_source=lambda: next(numbers))
        ops.create_directory('/tmp/job_1')
        ops.create_file('/tmp/job_2')

        result = ops.create_temp_directory('job')

        self.assertEqual(str(result), '/tmp/job_3')

    def test_default_prefix_from_config(self):
        """Test the prefix falls back to configuration."""
        from pathkit.core.config_loader import ConfigLoader

        ConfigLoader().reset()
        ops, fs = make_ops(temp_root='/tmp', random_source=lambda: 5)

        self.assertEqual(str(ops.create_temp_directory()), '/tmp/pathkit_5')


def run_tests():
    """Run all tests."""
    loader = unittest.TestLoader()
    suite = loader.loadTestsFromModule(sys.modules[__name__])

    runner = unittest.TextTestRunner(verbosity=2)
    result = runner.run(suite)

    return 0 if result.wasSuccessful() else 1


if __name__ == '__main__':
    sys.exit(run_tests())
