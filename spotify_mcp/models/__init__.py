from .music import Track, Playlist, Device, PlaybackState, SearchResult

__all__ = ["Track", "Playlist", "Device", "PlaybackState", "SearchResult"]
