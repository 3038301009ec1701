from prhook.events.dispatcher import EventDispatcher

__all__ = ["EventDispatcher"]
