"""Unit tests for git repository discovery."""

from strata_fs.workspace import find_git_root, is_git_repo


class TestGitDiscovery:
    """Test cases for is_git_repo and find_git_root."""

    def test_is_git_repo(self, tmp_path):
        (tmp_path / ".git").mkdir()

        assert is_git_repo(tmp_path) is True
        assert is_git_repo(str(tmp_path)) is True

    def test_git_file_counts_as_repo(self, tmp_path):
        # Worktrees and submodules use a .git file
        (tmp_path / ".git").write_text("gitdir: ../.git/worktrees/x\n")

        assert is_git_repo(tmp_path) is True

    def test_not_a_git_repo(self, tmp_path):
        assert is_git_repo(tmp_path) is False

    def test_find_git_root_walks_up(self, tmp_path):
        (tmp_path / ".git").mkdir()
        nested = tmp_path / "a" / "b" / "c"
        nested.mkdir(parents=True)

        assert find_git_root(nested) == str(tmp_path)

    def test_find_git_root_from_root_itself(self, tmp_path):
        (tmp_path / ".git").mkdir()

        assert find_git_root(tmp_path) == str(tmp_path)

    def test_find_git_root_defaults_to_cwd(self, tmp_path, monkeypatch):
        (tmp_path / ".git").mkdir()
        nested = tmp_path / "docs"
        nested.mkdir()
        monkeypatch.chdir(nested)

        assert find_git_root() == str(nested.resolve().parent)
