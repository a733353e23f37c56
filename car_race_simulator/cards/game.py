import logging
import random
from collections import deque
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import override

from car_race_simulator.core.errors import NotEnoughPlayersError

logger = logging.getLogger("car_race.cards")

MIN_PLAYERS: int = 2
MAX_ROUNDS: int = 10_000


class Suit(Enum):
    HEARTS = "Hearts"
    DIAMONDS = "Diamonds"
    CLUBS = "Clubs"
    SPADES = "Spades"


class Rank(IntEnum):
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14


@dataclass(frozen=True, slots=True)
class Card:
    suit: Suit
    rank: Rank

    @override
    def __str__(self) -> str:
        return f"{self.rank.name.title()} of {self.suit.value}"


@dataclass(slots=True)
class Player:
    name: str
    cards: deque[Card] = field(default_factory=deque)

    @property
    def active(self) -> bool:
        return bool(self.cards)

    def show_cards(self) -> list[str]:
        return [f"{self.name}'s cards:", *(str(card) for card in self.cards)]


def build_deck() -> list[Card]:
    return [Card(suit, rank) for suit in Suit for rank in Rank]


class CardGame:
    """
    Queue-rotation card game.

    Every round each player with cards plays the top of their queue; the
    highest rank takes the whole trick to the bottom of their queue. Ties go
    to whoever sits first.
    """

    def __init__(
        self,
        player_names: Sequence[str],
        rng: random.Random | None = None,
        output: Callable[[str], None] = print,
        max_rounds: int = MAX_ROUNDS,
    ) -> None:
        if len(player_names) < MIN_PLAYERS:
            raise NotEnoughPlayersError(
                f"At least {MIN_PLAYERS} players are needed, got {len(player_names)}",
            )

        self.rng: random.Random = rng if rng is not None else random.Random()
        self.output: Callable[[str], None] = output
        self.max_rounds: int = max_rounds
        self.rounds: int = 0

        self.players: list[Player] = [Player(name) for name in player_names]
        self.deck: list[Card] = build_deck()
        self.rng.shuffle(self.deck)
        self.dealt: int = self._deal()

    def _deal(self) -> int:
        """Deal equal hands; leftover cards stay out of the game."""
        per_player = len(self.deck) // len(self.players)
        for i, player in enumerate(self.players):
            player.cards.extend(self.deck[i * per_player : (i + 1) * per_player])
        return per_player * len(self.players)

    def play_round(self) -> Player:
        played: list[tuple[Card, Player]] = []
        for player in self.players:
            if player.active:
                card = player.cards.popleft()
                played.append((card, player))
                self.output(f"{player.name} plays {card}")

        # max() keeps the first of equal ranks
        _, winner = max(played, key=lambda entry: entry[0].rank)
        self.output(f"{winner.name} wins the round!")
        winner.cards.extend(card for card, _ in played)

        self.rounds += 1
        return winner

    def holder_of_all_cards(self) -> Player | None:
        return next((p for p in self.players if len(p.cards) == self.dealt), None)

    def play(self) -> str:
        self.output("=== THE GAME HAS STARTED ===")

        while (winner := self.holder_of_all_cards()) is None:
            if self.rounds >= self.max_rounds:
                winner = max(self.players, key=lambda p: len(p.cards))
                logger.warning(
                    "No player collected every card after %d rounds; %s leads with %d",
                    self.rounds,
                    winner.name,
                    len(winner.cards),
                )
                break
            self.play_round()

        self.output(f"\n=== {winner.name} WINS THE GAME! ===")
        return winner.name
