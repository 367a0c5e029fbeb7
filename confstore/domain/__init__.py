"""
领域层
"""
