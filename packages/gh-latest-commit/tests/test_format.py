from gh_latest_commit.events.models import CommitRecord
from gh_latest_commit.format import commit_url, format_line, format_preview, truncate_message


def test_long_message_is_truncated_to_45_chars_with_ellipsis():
    record = CommitRecord(message="x" * 60, repo_name="o/r", sha="abc123")
    assert format_line(record) == "x" * 45 + "..." + " o/r@abc123"


def test_message_of_exactly_50_chars_is_kept():
    message = "y" * 50
    assert truncate_message(message) == message
    record = CommitRecord(message=message, repo_name="o/r", sha="abc")
    assert format_line(record) == f"{message} o/r@abc"


def test_message_of_51_chars_is_truncated():
    assert truncate_message("z" * 51) == "z" * 45 + "..."


def test_short_multiline_message_is_kept_verbatim():
    record = CommitRecord(message="fix\n\nbody", repo_name="o/r", sha="abc")
    assert format_line(record) == "fix\n\nbody o/r@abc"


def test_long_multiline_message_is_cut_by_length():
    message = "short\n" + "x" * 60
    record = CommitRecord(message=message, repo_name="o/r", sha="abc")
    assert format_line(record) == message[:45] + "... o/r@abc"


def test_commit_url_uses_host():
    record = CommitRecord(message="m", repo_name="octo/repo", sha="deadbeef")
    assert commit_url(record) == "https://github.com/octo/repo/commit/deadbeef"
    assert commit_url(record, "ghe.example.com") == "https://ghe.example.com/octo/repo/commit/deadbeef"


def test_preview_links_image_to_commit():
    record = CommitRecord(message="m", repo_name="octo/repo", sha="deadbeef42")
    fragment = format_preview(record, "https://img.example/card.png")
    lines = fragment.splitlines()
    assert lines[0] == "[![octo/repo@deadbee](https://img.example/card.png)][latest-commit]"
    assert lines[-1] == "[latest-commit]: https://github.com/octo/repo/commit/deadbeef42"
