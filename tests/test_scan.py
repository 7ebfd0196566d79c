"""Tests for the scan pipeline and the sync step."""

import io
import logging
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from data_sweep import scan
from data_sweep.config import ScanConfig
from data_sweep.errors import TraversalError
from data_sweep.git_wrapper import GitClient
from data_sweep.scan import DirState


@pytest.fixture
def layout(tmp_path: Path) -> tuple[Path, Path]:
    """Creates d1 (qualified, with data/summary.txt) and d2 (no data/)."""
    d1 = tmp_path / "d1"
    (d1 / "data").mkdir(parents=True)
    (d1 / "data" / "summary.txt").write_text("ok")
    d2 = tmp_path / "d2"
    d2.mkdir()
    (d2 / "summary.txt").write_text("ignored")
    return d1, d2


@pytest.fixture
def client(mocker: MagicMock) -> MagicMock:
    return mocker.create_autospec(GitClient, instance=True)


def _config(tmp_path: Path, dirs: tuple[Path, ...], **kwargs) -> ScanConfig:  # type: ignore[no-untyped-def]
    return ScanConfig(
        candidate_root=str(tmp_path / "no-root"),
        extra_dirs=tuple(str(d) for d in dirs),
        **kwargs,
    )


def _by_path(results: list[scan.DirResult]) -> dict[str, scan.DirResult]:
    return {r.path: r for r in results}


def test_run_reports_matches_in_qualified_dirs_only(
    tmp_path: Path, layout: tuple[Path, Path], client: MagicMock
) -> None:
    """Verifies that only qualified directories are searched."""
    d1, d2 = layout
    out = io.StringIO()

    results = _by_path(scan.run(_config(tmp_path, layout), client=client, out=out))

    expected = str(d1 / "data" / "summary.txt")
    assert out.getvalue() == f"{expected}\n"
    assert results[str(d1)].state is DirState.MATCHED
    assert results[str(d1)].matches == [expected]
    assert results[str(d2)].state is DirState.SKIPPED
    # The ten synthetic candidates don't exist.
    assert sum(r.state is DirState.SKIPPED for r in results.values()) == 11
    client.pull.assert_not_called()


def test_run_syncs_once_per_directory(
    tmp_path: Path, layout: tuple[Path, Path], client: MagicMock
) -> None:
    """Verifies that several matching patterns trigger a single pull."""
    d1, _ = layout
    (d1 / "run.log").write_text("")
    (d1 / "data" / "more.log").write_text("")
    config = _config(
        tmp_path, layout, git_pull=True, files=("summary.txt", "*.log")
    )
    out = io.StringIO()

    results = _by_path(scan.run(config, client=client, out=out))

    assert len(out.getvalue().splitlines()) == 3
    assert results[str(d1)].state is DirState.SYNCED
    client.pull.assert_called_once_with(str(d1))


def test_run_without_matches_never_syncs(
    tmp_path: Path, layout: tuple[Path, Path], client: MagicMock
) -> None:
    """Verifies that a qualified directory without matches is not pulled."""
    d1, _ = layout
    config = _config(tmp_path, layout, git_pull=True, files=("*.csv",))

    results = _by_path(scan.run(config, client=client, out=io.StringIO()))

    assert results[str(d1)].state is DirState.NO_MATCH
    client.pull.assert_not_called()


def test_sync_directory_skips_vanished_directory(
    tmp_path: Path, client: MagicMock
) -> None:
    """Verifies that a directory removed before sync is not pulled."""
    config = ScanConfig(git_pull=True)

    assert scan.sync_directory(str(tmp_path / "gone"), config, client) is False
    assert scan.sync_directory(str(tmp_path), config, client) is True
    client.pull.assert_called_once_with(str(tmp_path))


def test_sync_directory_disabled(tmp_path: Path, client: MagicMock) -> None:
    """Verifies that sync is never attempted when the flag is off."""
    assert scan.sync_directory(str(tmp_path), ScanConfig(), client) is False
    client.pull.assert_not_called()


def test_sync_ignores_pull_failure(tmp_path: Path, client: MagicMock) -> None:
    """Verifies that a failing pull does not change the outcome."""
    client.pull.return_value = 128

    assert scan.sync_directory(str(tmp_path), ScanConfig(git_pull=True), client)


def test_run_bad_pattern_is_per_directory(
    tmp_path: Path,
    layout: tuple[Path, Path],
    client: MagicMock,
    caplog: pytest.LogCaptureFixture,
) -> None:
    """Verifies that a malformed pattern is logged and other patterns still run."""
    d1, _ = layout
    config = _config(tmp_path, layout, git_pull=True, files=("[bad", "summary.txt"))
    out = io.StringIO()

    with caplog.at_level(logging.ERROR, logger="data-sweep"):
        results = _by_path(scan.run(config, client=client, out=out))

    assert "Error walking the path" in caplog.text
    assert "Malformed character class" in caplog.text
    assert out.getvalue() == f"{d1 / 'data' / 'summary.txt'}\n"
    assert results[str(d1)].state is DirState.SYNCED


def test_run_aborted_walk_does_not_trigger_sync(
    tmp_path: Path,
    layout: tuple[Path, Path],
    client: MagicMock,
    mocker: MagicMock,
) -> None:
    """Verifies that matches from a walk that later fails do not qualify for sync."""
    d1, _ = layout
    partial = str(d1 / "data" / "summary.txt")

    def broken_walk(directory: str, pattern: str):  # type: ignore[no-untyped-def]
        yield partial
        raise TraversalError("Cannot read: denied")

    mocker.patch("data_sweep.scan.find_matches", side_effect=broken_walk)
    out = io.StringIO()

    results = _by_path(
        scan.run(_config(tmp_path, layout, git_pull=True), client=client, out=out)
    )

    assert out.getvalue() == f"{partial}\n"
    assert results[str(d1)].state is DirState.NO_MATCH
    assert results[str(d1)].matches == [partial]
    client.pull.assert_not_called()


def test_run_logs_progress(
    tmp_path: Path,
    layout: tuple[Path, Path],
    client: MagicMock,
    caplog: pytest.LogCaptureFixture,
) -> None:
    """Verifies the trace lines emitted for each major step."""
    d1, d2 = layout
    config = _config(tmp_path, layout, git_pull=True)

    with caplog.at_level(logging.INFO, logger="data-sweep"):
        scan.run(config, client=client, out=io.StringIO())

    assert f"Checking directory: {d1}" in caplog.text
    assert f"Data directory exists: {d1 / 'data'}" in caplog.text
    assert f"Data directory does not exist: {d2 / 'data'}" in caplog.text
    assert "Found summary.txt file:" in caplog.text
    assert f"Executing git pull in: {d1}" in caplog.text


def test_run_defaults_to_stdout(
    tmp_path: Path,
    layout: tuple[Path, Path],
    client: MagicMock,
    capsys: pytest.CaptureFixture,
) -> None:
    """Verifies that matches stream to stdout when no output is given."""
    d1, _ = layout

    scan.run(_config(tmp_path, layout), client=client)

    assert capsys.readouterr().out == f"{d1 / 'data' / 'summary.txt'}\n"


def test_run_survives_failing_vcs_binary(
    tmp_path: Path, layout: tuple[Path, Path]
) -> None:
    """Verifies that a real pull exiting non-zero with non-UTF-8 output is ignored."""
    d1, _ = layout
    script = tmp_path / "fake-vcs"
    calls = tmp_path / "calls.log"
    script.write_text(
        "#!/bin/sh\n"
        f'echo "$@" >> "{calls}"\n'
        "printf '\\377\\376 bad bytes' >&2\n"
        "exit 1\n"
    )
    script.chmod(0o755)
    config = _config(tmp_path, layout, git_pull=True, vcs=str(script))
    out = io.StringIO()

    results = _by_path(scan.run(config, out=out))

    assert out.getvalue() == f"{d1 / 'data' / 'summary.txt'}\n"
    assert results[str(d1)].state is DirState.SYNCED
    assert calls.read_text() == f"-C {d1} pull\n"
