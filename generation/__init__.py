"""
Procedural generation of pilots, draft pools and new leagues.
"""
from .generate import generate_player, generate_draft_pool, build_draft_order, create_league

__all__ = ["generate_player", "generate_draft_pool", "build_draft_order", "create_league"]
