# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Horizon - Mental Wellness Companion project.
# Licensed under the MIT License - see the LICENSE file for details.

import enum
from typing import Dict, FrozenSet, Optional

from horizon.schemas.user_schemas import UserProfile


class Screen(str, enum.Enum):
    login = "login"
    signup = "signup"
    home = "home"
    breathe_ease = "breathe-ease"
    mood_check = "mood-check"
    heart_journal = "heart-journal"
    chatbot = "chatbot"
    profile = "profile"
    crisis = "crisis"


PUBLIC_SCREENS: FrozenSet[Screen] = frozenset({Screen.login, Screen.signup})
APP_SCREENS: FrozenSet[Screen] = frozenset(Screen) - PUBLIC_SCREENS

# Allowed moves, keyed by (authenticated, current screen)
TRANSITIONS: Dict[bool, Dict[Screen, FrozenSet[Screen]]] = {
    False: {
        Screen.login: frozenset({Screen.signup}),
        Screen.signup: frozenset({Screen.login}),
    },
    True: {screen: APP_SCREENS - {screen} for screen in APP_SCREENS},
}

NAV_LINKS = [
    ("Home", Screen.home),
    ("Breathe & Ease", Screen.breathe_ease),
    ("Mood Check", Screen.mood_check),
    ("Heart Journal", Screen.heart_journal),
    ("AI Friend", Screen.chatbot),
]


class Navigator:
    """Current screen plus the transition rules between screens."""

    def __init__(self, screen: Screen = Screen.login):
        self.screen = screen
        self.authenticated = False

    def can_go(self, target: Screen) -> bool:
        if target == self.screen:
            return True
        return target in TRANSITIONS[self.authenticated].get(self.screen, frozenset())

    def go(self, target: Screen) -> Screen:
        if not self.can_go(target):
            raise ValueError(f"Cannot move from {self.screen.value} to {target.value}")
        self.screen = target
        return self.screen

    def on_user_change(self, user: Optional[UserProfile]):
        self.authenticated = user is not None
        if self.authenticated:
            self.screen = Screen.home
        elif self.screen != Screen.signup:
            # Stay on sign-up when signing out from there
            self.screen = Screen.login
