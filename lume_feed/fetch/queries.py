"""Curated search queries that tend to surface long, well-illustrated pages."""

INTERESTING_QUERIES: tuple[str, ...] = (
    # History
    "ancient civilization", "historical battle", "revolution", "medieval period",
    "renaissance", "world war", "empire", "dynasty", "archeological discovery",
    "historical figure", "ancient wonder", "historical monument",
    # Places and geography
    "mountain", "volcano", "desert", "rainforest", "ocean", "island",
    "national park", "UNESCO world heritage", "ancient city", "landmark",
    "natural wonder", "geological formation", "canyon", "waterfall",
    # People
    "scientist", "explorer", "inventor", "philosopher", "artist",
    "composer", "mathematician", "astronomer", "naturalist", "pioneer",
    # Science
    "scientific discovery", "space exploration", "particle physics",
    "astronomy", "biology", "chemistry", "geology", "paleontology",
    "evolution", "quantum", "cosmos", "dinosaur", "extinct species",
    # Culture
    "mythology", "legend", "ancient ritual", "archaeological site",
    "mysterious", "unexplained phenomenon", "cultural tradition",
    "architectural marvel", "engineering feat", "ancient technology",
)
