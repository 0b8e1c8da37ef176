from addon.client.api_client import AddOnApiClient
from addon.client.game_observer import GameStateObserver, GameView

__all__ = ["AddOnApiClient", "GameStateObserver", "GameView"]
