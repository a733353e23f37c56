from car_race_simulator.cards.game import Card, CardGame, Player, Rank, Suit

__all__ = ["Card", "CardGame", "Player", "Rank", "Suit"]
