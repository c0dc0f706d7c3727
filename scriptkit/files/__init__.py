"""
scriptkit/files - 파일 조작 헬퍼
"""
