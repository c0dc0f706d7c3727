"""
tests/scriptkit/git/test_ls_files.py - scriptkit/git/ls_files.py 테스트

임시 디렉토리에 실제 git 저장소를 만들어 확인합니다.
"""

import shutil

import pytest

from scriptkit.git.ls_files import (
    FileCannotBeCanonicalizedError,
    NotAGitRepositoryError,
    clone_repo_to,
    find_git_root,
    list_git_tracked_files,
    with_repo_temporarily_cloned_to,
)
from scriptkit.tty.executor import ExecuteOptions, IOMode

pytestmark = pytest.mark.skipif(shutil.which("git") is None, reason="git 필요")


@pytest.fixture
def repo(tmp_path, executor, run):
    """추적 파일 3개 + 미추적 파일 1개가 있는 저장소"""
    root = tmp_path / "repo"
    (root / "src" / "pkg").mkdir(parents=True)
    (root / "README.md").write_text("readme")
    (root / "src" / "main.py").write_text("main")
    (root / "src" / "pkg" / "util.py").write_text("util")
    (root / "untracked.txt").write_text("ignored")

    async def init():
        options = ExecuteOptions(dir=root)
        await executor.execute("git", ["init", "-q"], IOMode.MUTE, options)
        await executor.execute("git", ["add", "README.md", "src"], IOMode.MUTE, options)

    run(init())
    return root.resolve()


class TestFindGitRoot:
    """find_git_root 테스트"""

    def test_from_subdirectory(self, repo, executor, run):
        """하위 디렉토리에서 루트 찾기"""
        assert run(find_git_root(executor, repo / "src" / "pkg")) == repo

    def test_from_file(self, repo, executor, run):
        """파일 경로도 허용"""
        assert run(find_git_root(executor, repo / "src" / "main.py")) == repo

    def test_not_a_repository(self, tmp_path, executor, run, monkeypatch):
        """저장소가 아닌 경로"""
        monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path))
        plain = tmp_path / "plain"
        plain.mkdir()
        with pytest.raises(NotAGitRepositoryError):
            run(find_git_root(executor, plain))

    def test_missing_path(self, tmp_path, executor, run):
        """없는 경로"""
        with pytest.raises(NotAGitRepositoryError):
            run(find_git_root(executor, tmp_path / "missing"))


class TestListTrackedFiles:
    """list_git_tracked_files 테스트"""

    def test_lists_tracked_only(self, repo, executor, run):
        """추적 파일만 절대 경로로"""
        files = run(list_git_tracked_files(executor, repo))
        assert sorted(files) == sorted(
            [repo / "README.md", repo / "src" / "main.py", repo / "src" / "pkg" / "util.py"]
        )

    def test_filter_subpath(self, repo, executor, run):
        """하위 경로로 제한"""
        files = run(list_git_tracked_files(executor, repo, filter_subpath="src/pkg"))
        assert files == [repo / "src" / "pkg" / "util.py"]

    def test_missing_subpath(self, repo, executor, run):
        """없는 하위 경로"""
        with pytest.raises(FileCannotBeCanonicalizedError):
            run(list_git_tracked_files(executor, repo, filter_subpath="nope"))

    def test_paths_with_surrounding_whitespace(self, repo, executor, run):
        """공백으로 시작하거나 끝나는 파일 이름도 그대로"""
        (repo / " lead.txt").write_text("lead")
        (repo / "z-trail.txt ").write_text("trail")
        run(executor.execute("git", ["add", " lead.txt", "z-trail.txt "], IOMode.MUTE, ExecuteOptions(dir=repo)))

        files = run(list_git_tracked_files(executor, repo))
        assert repo / " lead.txt" in files
        assert repo / "z-trail.txt " in files
        assert all(file.exists() for file in files)


class TestClone:
    """clone_repo_to / with_repo_temporarily_cloned_to 테스트"""

    def test_clone_copies_tracked_files(self, repo, executor, run, printer, tmp_path):
        """추적 파일만 상대 경로 유지하여 복사"""
        destination = tmp_path / "clone"
        run(clone_repo_to(executor, printer, repo, destination))
        assert (destination / "src" / "pkg" / "util.py").read_text() == "util"
        assert (destination / "README.md").exists()
        assert not (destination / "untracked.txt").exists()
        assert "Cloning repo at" in printer.output()

    def test_missing_tracked_file_warns(self, repo, executor, run, printer, tmp_path):
        """복사 실패는 경고만"""
        (repo / "README.md").unlink()
        run(clone_repo_to(executor, printer, repo, tmp_path / "clone"))
        assert "File 'README.md' not copied." in printer.output()
        assert (tmp_path / "clone" / "src" / "main.py").exists()

    def test_temporary_clone_removed(self, repo, executor, run, printer, tmp_path):
        """블록 종료 시 삭제"""
        destination = tmp_path / "tmp-clone"

        async def scenario():
            async with with_repo_temporarily_cloned_to(executor, printer, repo, destination, "src") as path:
                assert (path / "src" / "main.py").exists()
                assert not (path / "README.md").exists()

        run(scenario())
        assert not destination.exists()
