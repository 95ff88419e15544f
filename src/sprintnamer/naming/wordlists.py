"""Default word lists for generated sprint names.

Changing either list (including its order) changes every generated name,
so bump the generator version alongside any edit.
"""

from __future__ import annotations

ADJECTIVES: tuple[str, ...] = (
    "amber",
    "ancient",
    "arctic",
    "autumn",
    "bold",
    "brave",
    "breezy",
    "bright",
    "brisk",
    "calm",
    "clever",
    "cobalt",
    "cosmic",
    "crimson",
    "crisp",
    "curious",
    "dapper",
    "daring",
    "dusty",
    "eager",
    "electric",
    "emerald",
    "fearless",
    "fierce",
    "gentle",
    "gilded",
    "golden",
    "grand",
    "hidden",
    "humble",
    "icy",
    "jolly",
    "keen",
    "lively",
    "lucky",
    "lunar",
    "mellow",
    "mighty",
    "misty",
    "nimble",
    "noble",
    "polar",
    "proud",
    "quiet",
    "radiant",
    "rapid",
    "rustic",
    "scarlet",
    "silent",
    "silver",
    "sly",
    "solar",
    "steady",
    "stormy",
    "sunny",
    "swift",
    "tidal",
    "velvet",
    "vivid",
    "wild",
    "windy",
    "wise",
    "witty",
    "zesty",
)

NOUNS: tuple[str, ...] = (
    "albatross",
    "badger",
    "beacon",
    "bison",
    "canyon",
    "comet",
    "condor",
    "coral",
    "cougar",
    "coyote",
    "crane",
    "delta",
    "dolphin",
    "eagle",
    "ember",
    "falcon",
    "fjord",
    "fox",
    "galaxy",
    "gazelle",
    "geyser",
    "glacier",
    "harbor",
    "hawk",
    "heron",
    "horizon",
    "ibis",
    "jaguar",
    "kestrel",
    "lagoon",
    "lantern",
    "lynx",
    "magpie",
    "meadow",
    "meteor",
    "moose",
    "nebula",
    "oasis",
    "orca",
    "osprey",
    "otter",
    "panther",
    "pebble",
    "pelican",
    "pine",
    "prairie",
    "quasar",
    "raven",
    "reef",
    "river",
    "sequoia",
    "sparrow",
    "summit",
    "tiger",
    "tundra",
    "valley",
    "walrus",
    "willow",
    "wolf",
    "zephyr",
)
