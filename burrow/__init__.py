"""Burrow Sheets — 공간 인벤토리 & 아이템 해석 엔진"""
__version__ = "0.1.0"
