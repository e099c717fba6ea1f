"""Utility helpers for querycache."""
