"""
word_lists.py – Built-in candidate words, grouped by length.

Used by the CLI and the simulation runner for both word selection at setup
and the word bank the AI guesses whole words from.
"""

from __future__ import annotations

WORDS_BY_LENGTH: dict[int, tuple[str, ...]] = {
    3: (
        "ANT", "APE", "ARM", "BAT", "BED", "BEE", "BOX", "BUS", "CAB", "CAP",
        "CAT", "COW", "CUP", "DEN", "DOG", "EAR", "EGG", "ELF", "FAN", "FIG",
        "FOX", "GEM", "HAT", "HEN", "INK", "JAR", "JET", "KEY", "LOG", "MAP",
        "MUD", "NET", "OAK", "OWL", "PAN", "PIG", "RAT", "SUN", "TOY", "YAK",
    ),
    4: (
        "BEAR", "BELL", "BIRD", "BOAT", "BONE", "CAKE", "CAVE", "COIN", "CROW", "DESK",
        "DOGS", "DOOR", "DUCK", "FISH", "FLAG", "FROG", "GOAT", "HARP", "HAWK", "KITE",
        "LAMP", "LION", "MAST", "MOON", "NEST", "PEAR", "RAIN", "ROPE", "SAIL", "SEAL",
        "SHIP", "SNOW", "STAR", "TENT", "TREE", "VASE", "WAVE", "WOLF", "WORM", "YARN",
    ),
    5: (
        "APPLE", "BEACH", "BIRDS", "BREAD", "BRUSH", "CANDY", "CHAIR", "CLOCK", "CLOUD", "CRANE",
        "DRUMS", "EAGLE", "FLAME", "GHOST", "GRAPE", "HORSE", "HOUSE", "JEWEL", "KNIFE", "LEMON",
        "MAPLE", "MOUSE", "OCEAN", "PIANO", "PLANT", "QUEEN", "RIVER", "ROBOT", "SHARK", "SNAKE",
        "STONE", "STORM", "SWORD", "TIGER", "TORCH", "TOWER", "TRAIN", "WATER", "WHALE", "ZEBRA",
    ),
    6: (
        "ANCHOR", "BASKET", "BRIDGE", "CACTUS", "CANDLE", "CASTLE", "CIRCUS", "DRAGON", "FOREST", "GARDEN",
        "GUITAR", "HAMMER", "JUNGLE", "KETTLE", "LADDER", "LIZARD", "MARKET", "MIRROR", "MONKEY", "PARROT",
        "PENCIL", "PEPPER", "PIRATE", "PLANET", "POCKET", "RABBIT", "ROCKET", "SADDLE", "SILVER", "SPIDER",
        "SUMMER", "TEMPLE", "TICKET", "TOMATO", "TURTLE", "VALLEY", "WALNUT", "WINDOW", "WIZARD", "YELLOW",
    ),
}


def candidates_by_length(lengths=None) -> dict[int, list[str]]:
    """Mutable copies of the lists, optionally limited to *lengths*."""
    wanted = set(lengths) if lengths is not None else set(WORDS_BY_LENGTH)
    return {n: list(words) for n, words in WORDS_BY_LENGTH.items() if n in wanted}


def word_bank(lengths=None) -> frozenset[str]:
    """Every known word of the given lengths, for whole-word guessing."""
    return frozenset(w for words in candidates_by_length(lengths).values() for w in words)
