"""Gymnasium environment wrapping a game session."""

from .gym_env import ACTION_SIZE, PASS_ACTION, TengenEnv, build_board_planes, decode_action, encode_point

__all__ = ["ACTION_SIZE", "PASS_ACTION", "TengenEnv", "build_board_planes", "decode_action", "encode_point"]
