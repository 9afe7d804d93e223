"""Page navigation: the editor's page cursor as a state machine."""

from tetris_bridge.navigation.navigator import PageNavigator, PageState

__all__ = ["PageNavigator", "PageState"]
