import io
import os

import pytest

from dynmenu.stest import Options, main, run, test_path as check_path


@pytest.fixture
def tree(tmp_path):
    (tmp_path / "file.txt").write_text("data")
    (tmp_path / "empty").write_text("")
    (tmp_path / ".hidden").write_text("x")
    (tmp_path / "sub").mkdir()
    script = tmp_path / "script"
    script.write_text("#!/bin/sh\n")
    script.chmod(0o755)
    plain = tmp_path / "plain"
    plain.write_text("text")
    plain.chmod(0o644)
    os.symlink(tmp_path / "file.txt", tmp_path / "link")
    os.symlink(tmp_path / "missing", tmp_path / "dangling")
    return tmp_path


def test_regular_file_passes_default_options(tree):
    path = str(tree / "file.txt")
    assert check_path(path, path, Options()) is True


def test_hidden_name_needs_hidden_flag(tree):
    path = str(tree / ".hidden")
    assert check_path(path, ".hidden", Options()) is False
    assert check_path(path, ".hidden", Options(hidden=True)) is True


def test_directory_flag(tree):
    opts = Options(directory=True)
    assert check_path(str(tree / "sub"), "sub", opts) is True
    assert check_path(str(tree / "file.txt"), "file.txt", opts) is False


def test_regular_flag(tree):
    opts = Options(regular=True)
    assert check_path(str(tree / "file.txt"), "file.txt", opts) is True
    assert check_path(str(tree / "sub"), "sub", opts) is False


def test_missing_path_fails_and_invert_flips(tree):
    path = str(tree / "nope")
    assert check_path(path, "nope", Options()) is False
    assert check_path(path, "nope", Options(invert=True)) is True


def test_symlink_flag(tree):
    opts = Options(symlink=True)
    assert check_path(str(tree / "link"), "link", opts) is True
    assert check_path(str(tree / "file.txt"), "file.txt", opts) is False
    assert check_path(str(tree / "dangling"), "dangling", opts) is False


def test_nonempty_flag(tree):
    opts = Options(nonempty=True)
    assert check_path(str(tree / "file.txt"), "file.txt", opts) is True
    assert check_path(str(tree / "empty"), "empty", opts) is False


def test_executable_flag(tree):
    opts = Options(executable=True, regular=True)
    assert check_path(str(tree / "script"), "script", opts) is True
    assert check_path(str(tree / "plain"), "plain", opts) is False


def test_fifo_flag(tree):
    fifo = tree / "pipe"
    os.mkfifo(fifo)
    opts = Options(fifo=True)
    assert check_path(str(fifo), "pipe", opts) is True
    assert check_path(str(tree / "file.txt"), "file.txt", opts) is False


def test_newer_and_older(tree):
    old = tree / "empty"
    new = tree / "file.txt"
    os.utime(old, (1000, 1000))
    os.utime(new, (2000, 2000))
    assert check_path(str(new), "file.txt", Options(newer_than=1000)) is True
    assert check_path(str(old), "empty", Options(newer_than=1000)) is False
    assert check_path(str(old), "empty", Options(older_than=2000)) is True
    assert check_path(str(new), "file.txt", Options(older_than=2000)) is False


def test_run_prints_matching_paths(tree):
    out = io.StringIO()
    paths = [str(tree / "file.txt"), str(tree / "sub"), str(tree / "nope")]
    status = run(paths, Options(regular=True), io.StringIO(), out)
    assert status == 0
    assert out.getvalue().splitlines() == [str(tree / "file.txt")]


def test_run_without_match_returns_one(tree):
    out = io.StringIO()
    status = run([str(tree / "nope")], Options(), io.StringIO(), out)
    assert status == 1
    assert out.getvalue() == ""


def test_run_quiet_prints_nothing(tree):
    out = io.StringIO()
    status = run([str(tree / "file.txt")], Options(quiet=True), io.StringIO(), out)
    assert status == 0
    assert out.getvalue() == ""


def test_run_reads_stdin(tree):
    names = f"{tree / 'sub'}\n{tree / 'file.txt'}\n"
    out = io.StringIO()
    status = run([], Options(directory=True), io.StringIO(names), out)
    assert status == 0
    assert out.getvalue().splitlines() == [str(tree / "sub")]


def test_run_lists_directory_contents(tree):
    out = io.StringIO()
    run([str(tree)], Options(list_dirs=True, regular=True), io.StringIO(), out)
    listed = set(out.getvalue().splitlines())
    assert listed == {"file.txt", "empty", "script", "plain", "link"}


def test_run_lists_dot_entries_with_hidden(tree):
    out = io.StringIO()
    run([str(tree)], Options(list_dirs=True, hidden=True, directory=True),
        io.StringIO(), out)
    assert set(out.getvalue().splitlines()) == {".", "..", "sub"}


def test_main_unknown_flag(capsys):
    assert main(["-z"]) == 2
    assert "usage: stest" in capsys.readouterr().err


def test_main_missing_option_value(capsys):
    assert main(["-n"]) == 2
    assert "usage:" in capsys.readouterr().err


def test_main_filters_arguments(tree, capsys):
    status = main(["-d", str(tree / "sub"), str(tree / "file.txt")])
    assert status == 0
    assert capsys.readouterr().out.splitlines() == [str(tree / "sub")]


def test_main_clustered_flags_and_invert(tree, capsys):
    status = main(["-fv", str(tree / "sub"), str(tree / "file.txt")])
    assert status == 0
    assert capsys.readouterr().out.splitlines() == [str(tree / "sub")]


def test_main_unreadable_reference_disables_test(tree, capsys):
    missing = str(tree / "missing")
    status = main(["-n", missing, str(tree / "file.txt")])
    captured = capsys.readouterr()
    assert status == 0
    assert captured.err.startswith(f"{missing}: ")
    assert captured.out.splitlines() == [str(tree / "file.txt")]


def test_main_reads_stdin(tree, capsys, monkeypatch):
    monkeypatch.setattr("sys.stdin", io.StringIO(f"{tree / 'nope'}\n"))
    assert main(["-e"]) == 1
    assert capsys.readouterr().out == ""