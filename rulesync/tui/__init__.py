from rulesync.tui.renderers import SyncConsoleUI

__all__ = ["SyncConsoleUI"]
