import io

import pytest

from pgrecgen.db_codegen.sinks import (
    ConsoleSink,
    FileSystemSink,
    create_module_path,
)
from pgrecgen.shared.errors import OutputError


class TestCreateModulePath:
    def test_creates_directory(self, tmp_path):
        target = tmp_path / "records"

        existed = create_module_path(target)
        assert existed is False
        assert target.is_dir()

    def test_second_call_succeeds(self, tmp_path):
        target = tmp_path / "records"

        assert create_module_path(target) is False
        assert create_module_path(target) is True
        assert target.is_dir()

    def test_creates_parents(self, tmp_path):
        target = tmp_path / "a" / "b" / "records"
        create_module_path(target)
        assert target.is_dir()

    def test_path_is_a_file(self, tmp_path):
        target = tmp_path / "records"
        target.write_text("not a directory")

        with pytest.raises(OutputError) as exc_info:
            create_module_path(target)
        assert exc_info.value.output_path == str(target)

    def test_parent_is_a_file(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("")

        with pytest.raises(OutputError):
            create_module_path(blocker / "records")


class TestFileSystemSink:
    def test_prepare_and_write(self, tmp_path):
        sink = FileSystemSink(tmp_path / "out")
        sink.prepare()
        sink.write("orders.py", "x = 1\n")

        assert (tmp_path / "out" / "orders.py").read_text() == "x = 1\n"

    def test_write_overwrites(self, tmp_path):
        sink = FileSystemSink(tmp_path)
        sink.write("orders.py", "a very long first version\n")
        sink.write("orders.py", "short\n")

        assert (tmp_path / "orders.py").read_text() == "short\n"

    def test_prepare_existing_directory(self, tmp_path):
        sink = FileSystemSink(tmp_path)
        sink.prepare()
        sink.prepare()

    def test_description(self, tmp_path):
        assert FileSystemSink(tmp_path).description == str(tmp_path)


class TestConsoleSink:
    def test_write_with_header(self):
        stream = io.StringIO()
        sink = ConsoleSink(stream)
        sink.prepare()
        sink.write("orders.py", "x = 1\n")

        assert stream.getvalue() == "# ==> orders.py <==\nx = 1\n"

    def test_write_adds_missing_newline(self):
        stream = io.StringIO()
        ConsoleSink(stream).write("a.py", "x = 1")

        assert stream.getvalue().endswith("x = 1\n")

    def test_defaults_to_stdout(self, capsys):
        ConsoleSink().write("a.py", "pass\n")

        captured = capsys.readouterr()
        assert "# ==> a.py <==" in captured.out
