"""
tests/scriptkit/general/test_parameterized.py - scriptkit/general/parameterized.py 테스트
"""

import pytest

from scriptkit.general.parameterized import (
    ParameterizedString,
    ParameterizedStringError,
    define_parameterized_string,
)

BucketName = define_parameterized_string("BucketName", "env", "region")


class TestParameterizedString:
    """템플릿 검증 / 치환 테스트"""

    def test_defined_class(self):
        """하위 클래스 생성"""
        assert issubclass(BucketName, ParameterizedString)
        assert BucketName.__name__ == "BucketName"
        assert BucketName.PARAMS == ("env", "region")

    def test_get(self):
        """파라미터 치환"""
        template = BucketName("app-{env}-{region}-{env}")
        assert template.get(env="staging", region="eu-west-1") == "app-staging-eu-west-1-staging"

    def test_missing_placeholder(self):
        """선언된 파라미터가 템플릿에 없음"""
        with pytest.raises(ParameterizedStringError) as exc_info:
            BucketName("app-{env}")
        assert "{region}" in str(exc_info.value)

    def test_unknown_placeholder(self):
        """선언되지 않은 파라미터"""
        with pytest.raises(ParameterizedStringError) as exc_info:
            BucketName("app-{env}-{region}-{zone}")
        assert "Invalid placeholder" in str(exc_info.value)

    def test_missing_value(self):
        """치환 값 누락"""
        with pytest.raises(ParameterizedStringError):
            BucketName("{env}{region}").get(env="x")

    def test_equality_and_str(self):
        """같은 템플릿은 동일"""
        assert BucketName("{env}-{region}") == BucketName("{env}-{region}")
        assert str(BucketName("{env}-{region}")) == "{env}-{region}"
