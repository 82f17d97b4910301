from .sales import UserProfile, build_system_prompt

__all__ = ["UserProfile", "build_system_prompt"]
