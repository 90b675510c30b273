"""Errors raised by the game services.

Each error carries the message reported back to the offending participant.
None of them is raised after session state has been mutated.
"""


class GameError(Exception):
    """Base class for rejected player actions."""

    message = 'Invalid action.'

    def __init__(self, message=None):
        super().__init__(message or self.message)

    @property
    def code(self) -> str:
        return type(self).__name__


class NotFound(GameError):
    message = 'Game not found.'

    def __init__(self, game_id=None):
        super().__init__(f'Game not found: {game_id}' if game_id else None)
        self.game_id = game_id


class GameFull(GameError):
    message = 'This game is already full.'


class SelfJoin(GameError):
    message = 'You cannot join your own game.'


class UnknownParticipant(GameError):
    message = 'You are not a player in this game.'


class IllegalAction(GameError):
    message = 'Not your turn to select sabotage or invalid game phase.'


class WrongPhase(GameError):
    message = 'That action is not allowed in the current game phase.'


class NotYourTurn(GameError):
    message = "It's not your turn."


class InvalidCoordinates(GameError):
    message = 'Invalid coordinates selected.'


class InvalidColumn(GameError):
    message = 'Invalid column selected.'


class ColumnFull(GameError):
    message = 'This column is full.'
