"""
核心模块
"""
