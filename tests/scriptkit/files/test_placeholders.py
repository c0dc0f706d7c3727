"""
tests/scriptkit/files/test_placeholders.py - scriptkit/files/placeholders.py 테스트
"""

import pytest

from scriptkit.exceptions import FileSystemError
from scriptkit.files.placeholders import (
    UnreplacedPlaceholdersError,
    replace_all_placeholders_in_file,
    replace_placeholders,
)


class TestReplacePlaceholders:
    """텍스트 치환 테스트"""

    def test_replaces_known_keys(self):
        """알려진 키 치환"""
        text, unreplaced = replace_placeholders("{{Name}} v{{Version}}", {"Name": "app", "Version": "2"})
        assert text == "app v2"
        assert unreplaced == []

    def test_reports_unknown_keys_once(self):
        """모르는 키는 그대로 두고 한 번만 보고"""
        text, unreplaced = replace_placeholders("{{A}} {{B}} {{A}}", {})
        assert text == "{{A}} {{B}} {{A}}"
        assert unreplaced == ["A", "B"]

    def test_single_braces_untouched(self):
        """단일 중괄호는 대상 아님"""
        text, unreplaced = replace_placeholders("{Name} {{ Name }}", {"Name": "x"})
        assert text == "{Name} {{ Name }}"
        assert unreplaced == []


class TestReplaceInFile:
    """파일 치환 테스트"""

    def test_writes_destination(self, tmp_path):
        """결과를 dst 에 기록"""
        src = tmp_path / "template.yaml"
        src.write_text("name: {{Name}}\n")
        dst = tmp_path / "out.yaml"
        replace_all_placeholders_in_file(src, dst, {"Name": "api"})
        assert dst.read_text() == "name: api\n"
        assert src.read_text() == "name: {{Name}}\n"

    def test_in_place(self, tmp_path):
        """src == dst"""
        file = tmp_path / "f.txt"
        file.write_text("{{X}}")
        replace_all_placeholders_in_file(file, file, {"X": "1"})
        assert file.read_text() == "1"

    def test_unreplaced_error(self, tmp_path):
        """남은 placeholder 가 있으면 기록하지 않고 에러"""
        src = tmp_path / "t.txt"
        src.write_text("{{Known}} {{Unknown}}")
        dst = tmp_path / "out.txt"
        with pytest.raises(UnreplacedPlaceholdersError) as exc_info:
            replace_all_placeholders_in_file(src, dst, {"Known": "k"})
        assert exc_info.value.unreplaced == ["Unknown"]
        assert str(exc_info.value) == f"Unexpected placeholders remain in file '{src}': Unknown."
        assert not dst.exists()

    def test_unreplaced_allowed(self, tmp_path):
        """error_if_unreplaced=False 면 그대로 기록"""
        src = tmp_path / "t.txt"
        src.write_text("{{Known}} {{Unknown}}")
        dst = tmp_path / "out.txt"
        replace_all_placeholders_in_file(src, dst, {"Known": "k"}, error_if_unreplaced=False)
        assert dst.read_text() == "k {{Unknown}}"

    def test_missing_source(self, tmp_path):
        """없는 원본"""
        with pytest.raises(FileSystemError):
            replace_all_placeholders_in_file(tmp_path / "missing", tmp_path / "out", {})
