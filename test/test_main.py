"""Tests for the clings command-line interface."""

import json
from pathlib import Path

import pytest
from clings.main import main
from clings.main.parser import create_parser

TASKS = [
    {
        "id": "todo-jira-1",
        "name": "Review PROJ-1234 implementation",
        "status": "open",
        "tags": ["jira", "review"],
        "project": "Mobile App",
        "area": "🖥️ Work",
        "due": "2025-12-11",
    },
    {
        "id": "todo-completed-work",
        "name": "Merge PR #267",
        "status": "completed",
        "tags": ["jira"],
        "project": "Mobile App",
        "area": "🖥️ Work",
    },
    {
        "id": "todo-personal",
        "name": "Schedule dentist appointment",
        "status": "open",
        "area": "🏠 Personal",
    },
]


@pytest.fixture
def tasks_file(tmp_path: Path) -> str:
    path = tmp_path / "tasks.json"
    path.write_text(json.dumps(TASKS), encoding="utf-8")
    return str(path)


@pytest.fixture
def no_config(tmp_path: Path) -> list[str]:
    """Global options pointing at a config file that does not exist."""
    return ["--config", str(tmp_path / "none.yml")]


def _run(argv: list[str]) -> int:
    with pytest.raises(SystemExit) as exc_info:
        main(argv)
    return exc_info.value.code  # type: ignore[return-value]


def test_create_parser_filter_options() -> None:
    """Test parsing of the filter subcommand and its options."""
    args = create_parser().parse_args(
        ["filter", "status = open", "-f", "t.json", "-o", "plain", "-n", "3"]
    )
    assert args.command == "filter"
    assert args.query == "status = open"
    assert args.tasks_file == "t.json"
    assert args.format == "plain"
    assert args.limit == 3


def test_create_parser_filter_alias_and_defaults() -> None:
    """Test the short alias and option defaults."""
    args = create_parser().parse_args(["f", "status = open"])
    assert args.command == "f"
    assert args.tasks_file is None
    assert args.format is None
    assert args.limit is None
    assert args.verbose is False


def test_create_parser_rejects_unknown_format() -> None:
    """Test that only known output formats are accepted."""
    with pytest.raises(SystemExit):
        create_parser().parse_args(["filter", "status = open", "-o", "xml"])


def test_check_prints_canonical_form(
    no_config: list[str], capsys: pytest.CaptureFixture[str]
) -> None:
    """Test that check prints the canonical query."""
    code = _run([*no_config, "check", "Status = Cancelled and title like '%x%'"])
    assert code == 0
    assert capsys.readouterr().out.strip() == (
        "status = 'canceled' AND name LIKE '%x%'"
    )


def test_check_invalid_query(
    no_config: list[str], capsys: pytest.CaptureFixture[str]
) -> None:
    """Test that invalid queries exit with status 1."""
    code = _run([*no_config, "check", "priority = high"])
    assert code == 1
    assert "Error: Invalid query: Unknown field: priority" in capsys.readouterr().err


def test_filter_plain_output(
    no_config: list[str], tasks_file: str, capsys: pytest.CaptureFixture[str]
) -> None:
    """Test tab-separated output."""
    code = _run(
        [*no_config, "filter", "tags CONTAINS 'jira'", "-f", tasks_file, "-o", "plain"]
    )
    assert code == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines == [
        "todo-jira-1\topen\tReview PROJ-1234 implementation\tMobile App"
        "\t🖥️ Work\t2025-12-11\tjira,review",
        "todo-completed-work\tcompleted\tMerge PR #267\tMobile App"
        "\t🖥️ Work\t-\tjira",
    ]


def test_filter_json_output_with_limit(
    no_config: list[str], tasks_file: str, capsys: pytest.CaptureFixture[str]
) -> None:
    """Test JSON output honours --limit."""
    code = _run(
        [*no_config, "filter", "status = open", "-f", tasks_file, "-o", "json", "-n", "1"]
    )
    assert code == 0
    data = json.loads(capsys.readouterr().out)
    assert [item["id"] for item in data] == ["todo-jira-1"]
    assert data[0]["tags"] == ["jira", "review"]


def test_filter_rich_no_matches(
    no_config: list[str], tasks_file: str, capsys: pytest.CaptureFixture[str]
) -> None:
    """Test the rich output when nothing matches."""
    code = _run([*no_config, "filter", "project = 'Garden'", "-f", tasks_file])
    assert code == 0
    assert "No todos match the query." in capsys.readouterr().out


def test_filter_rich_table(
    no_config: list[str], tasks_file: str, capsys: pytest.CaptureFixture[str]
) -> None:
    """Test the rich table output includes a summary."""
    code = _run([*no_config, "filter", "area LIKE '%Personal%'", "-f", tasks_file])
    assert code == 0
    assert "Found 1 todo(s): 1 Open" in capsys.readouterr().out


def test_filter_uses_config_defaults(
    tmp_path: Path, tasks_file: str, capsys: pytest.CaptureFixture[str]
) -> None:
    """Test that tasks_file and output format come from the config file."""
    config_path = tmp_path / "clings.yml"
    config_path.write_text(
        f"tasks_file: {tasks_file}\noutput:\n  format: plain\n"
        "filter:\n  status_synonyms:\n    done: completed\n",
        encoding="utf-8",
    )
    code = _run(["--config", str(config_path), "filter", "status = done"])
    assert code == 0
    assert capsys.readouterr().out.splitlines() == [
        "todo-completed-work\tcompleted\tMerge PR #267\tMobile App\t🖥️ Work\t-\tjira"
    ]


def test_filter_invalid_query(
    no_config: list[str], tasks_file: str, capsys: pytest.CaptureFixture[str]
) -> None:
    """Test that a bad query is reported before the task file is read."""
    code = _run([*no_config, "filter", "name CONTAINS 'x'", "-f", tasks_file])
    assert code == 1
    assert "Error: Invalid query:" in capsys.readouterr().err


def test_filter_missing_task_file(
    no_config: list[str], tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """Test that an unreadable task file exits with status 1."""
    code = _run(
        [*no_config, "filter", "status = open", "-f", str(tmp_path / "none.json")]
    )
    assert code == 1
    assert "Cannot read task file" in capsys.readouterr().err


def test_filter_rich_limit_warns_when_truncated(
    no_config: list[str], tasks_file: str, capsys: pytest.CaptureFixture[str]
) -> None:
    """Test that the table view says when --limit hid matches."""
    code = _run([*no_config, "filter", "status = open", "-f", tasks_file, "-n", "1"])
    assert code == 0
    out = capsys.readouterr().out
    assert "Found 1 todo(s): 1 Open" in out
    assert "Showing 1 of 2 matching todos." in out


def test_filter_bare_date_query(
    no_config: list[str], tasks_file: str, capsys: pytest.CaptureFixture[str]
) -> None:
    """Test an unquoted ISO date on the command line."""
    code = _run(
        [*no_config, "filter", "due <= 2025-12-11", "-f", tasks_file, "-o", "plain"]
    )
    assert code == 0
    lines = capsys.readouterr().out.splitlines()
    assert [line.split("\t")[0] for line in lines] == ["todo-jira-1"]
