"""
tests/scriptkit/general/test_hashing.py - scriptkit/general/hashing.py 테스트
"""

import pytest

from scriptkit.general.hashing import deterministic_number_from_string


class TestDeterministicNumber:
    """결정적 숫자 생성 테스트"""

    def test_same_input_same_output(self):
        """같은 입력은 같은 값"""
        first = deterministic_number_from_string("my-project", 5600, 5800)
        assert deterministic_number_from_string("my-project", 5600, 5800) == first

    def test_within_inclusive_range(self):
        """범위 안 (경계 포함)"""
        for index in range(200):
            value = deterministic_number_from_string(f"name-{index}", 5600, 5800)
            assert 5600 <= value <= 5800

    def test_single_value_range(self):
        """min == max"""
        assert deterministic_number_from_string("anything", 7, 7) == 7

    def test_spreads_values(self):
        """서로 다른 입력은 여러 값으로 분산"""
        values = {deterministic_number_from_string(f"name-{i}", 0, 1000) for i in range(50)}
        assert len(values) > 40

    def test_invalid_range(self):
        """min > max"""
        with pytest.raises(ValueError):
            deterministic_number_from_string("x", 10, 1)
