"""
scriptkit/networking - 네트워크 헬퍼
"""
