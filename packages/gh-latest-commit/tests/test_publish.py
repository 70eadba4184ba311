import subprocess

import pytest

from gh_latest_commit.errors import PublishError
from gh_latest_commit.events.models import CommitRecord
from gh_latest_commit.publish import GitPublisher, commit_message

RECORD = CommitRecord(message="m", repo_name="octo/repo", sha="abc123")


class Recorder:
    def __init__(self, fail_on=None):
        self.commands = []
        self.fail_on = fail_on

    def __call__(self, command, **kwargs):
        self.commands.append(command)
        code = 1 if self.fail_on and self.fail_on in command else 0
        return subprocess.CompletedProcess(command, code, stdout="", stderr="rejected" if code else "")


def test_commit_message_names_repo_and_sha():
    assert commit_message(RECORD) == "Update latest commit to octo/repo@abc123"


def test_publish_stages_commits_and_pushes():
    runner = Recorder()
    GitPublisher(runner=runner).publish("README.md", RECORD)
    assert runner.commands == [
        ["git", "add", "README.md"],
        ["git", "commit", "-m", "Update latest commit to octo/repo@abc123"],
        ["git", "push"],
    ]


def test_publish_without_push_and_with_identity():
    runner = Recorder()
    publisher = GitPublisher(push=False, git_name="bot", git_email="bot@example.com", runner=runner)
    publisher.publish("README.md", RECORD)
    assert len(runner.commands) == 2
    assert runner.commands[1][:5] == ["git", "-c", "user.name=bot", "-c", "user.email=bot@example.com"]
    assert all("push" not in command for command in runner.commands)


def test_failed_git_command_raises_and_stops():
    runner = Recorder(fail_on="commit")
    with pytest.raises(PublishError, match="rejected") as excinfo:
        GitPublisher(runner=runner).publish("README.md", RECORD)
    assert excinfo.value.returncode == 1
    assert ["git", "push"] not in runner.commands


def test_missing_git_binary_raises_publish_error():
    def runner(command, **kwargs):
        raise FileNotFoundError(command[0])

    with pytest.raises(PublishError, match="not found"):
        GitPublisher(runner=runner).publish("README.md", RECORD)
