"""
scriptkit/general - 범용 유틸리티
"""
