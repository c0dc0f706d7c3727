"""
scriptkit/git - git 작업 디렉토리 헬퍼
"""
