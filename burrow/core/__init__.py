"""Burrow Core — 아이템 카탈로그 + 인벤토리 엔진 (웹 계층 비의존)"""
