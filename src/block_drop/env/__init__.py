"""Gymnasium environments for Block Drop."""

from __future__ import annotations

from gymnasium.envs.registration import register

register(
    id="BlockDrop-12x20-v0",
    entry_point="block_drop.env.block_drop_env:BlockDropEnv",
)

__all__ = ["BlockDrop-12x20-v0"]
