"""Curated vocabularies observed in Malaysian Hansard transcripts.

All phrases are written in their normalized form (lowercase, punctuation
replaced by spaces, apostrophes kept) so they can be compared token-wise.
"""

# Honorifics and titles stripped from names before comparison.
# Multi-word phrases are matched before their single-word parts.
HONORIFICS: tuple[str, ...] = (
    "yang berhormat",
    "y bhg",
    "yab",
    "yb",
    "timbalan perdana menteri",
    "perdana menteri",
    "timbalan menteri",
    "menteri",
    "datuk seri",
    "dato' seri",
    "dato' sri",
    "datuk",
    "dato'",
    "dato",
    "datin",
    "tan sri",
    "toh puan",
    "tun",
    "tuan",
    "puan",
    "haji",
    "hajjah",
    "hj",
    "dr",
    "ir",
    "ts",
    "prof",
    "kapten",
    "senator",
    "panglima",
    "seri",
    "sri",
    "utama",
)

# Connective particles inside Malay and Indian names.
NAME_PARTICLES: tuple[str, ...] = ("bin", "binti", "bt", "a/l", "a/p")

# Text that sits where a constituency would be but names a role instead.
NON_CONSTITUENCY_ROLES: tuple[str, ...] = (
    "yang di pertua",
    "timbalan yang di pertua",
    "speaker",
    "deputy speaker",
    "pengerusi",
    "tuan pengerusi",
    "puan pengerusi",
    "menteri",
    "timbalan menteri",
    "menteri besar",
    "ketua menteri",
    "tuan",
    "puan",
    "datuk",
    "dato'",
    "senator",
)

# Chair roles and presiding office-holders. Compared after name normalization,
# so honorifics and particles are already gone.
PARLIAMENTARY_OFFICIALS: tuple[str, ...] = (
    "yang di pertua",
    "timbalan yang di pertua",
    "speaker",
    "deputy speaker",
    "pengerusi",
    "yang amat berhormat",
    "ramli mohd nor",
    "alice lau kiong yieng",
)

# Spelling variants seen in transcripts, keyed by normalized constituency and
# mapped to the official constituency name.
CONSTITUENCY_OVERRIDES: dict[str, str] = {
    "tanjung malim": "Tanjong Malim",
    "tanjong piai": "Tanjung Piai",
    "tanjung karang": "Tanjong Karang",
    "ipoh timur": "Ipoh Timor",
    "bukit gelugur": "Bukit Gelugor",
    "tasik gelugor": "Tasek Gelugor",
    "johor baru": "Johor Bahru",
    "alor star": "Alor Setar",
    "kota baru": "Kota Bharu",
    "pasir putih": "Pasir Puteh",
    "lubuk antu": "Lubok Antu",
    "kulim bandar bahru": "Kulim Bandar Baharu",
    "pengkalan cepa": "Pengkalan Chepa",
    "bagan datoh": "Bagan Datuk",
    "hulu langat": "Hulu Langat",
    "ulu langat": "Hulu Langat",
    "ulu selangor": "Hulu Selangor",
    "kuala trengganu": "Kuala Terengganu",
    "sri gading": "Sri Gading",
    "seri gading": "Sri Gading",
    "sungei buloh": "Sungai Buloh",
    "sungei siput": "Sungai Siput",
    "sungei petani": "Sungai Petani",
    "bandar tun abdul razak": "Bandar Tun Razak",
    "indra mahkota": "Indera Mahkota",
}

# Spelling variants of legislator names, keyed by normalized name and mapped
# to the official registry name.
NAME_OVERRIDES: dict[str, str] = {
    "khairul firdaus akbar khan": "Khairul Firdaus Akhbar Khan",
    "yusuf apdal": "Yusof Apdal",
    "mohammad hasan": "Mohamad Hasan",
    "anuar shari": "Anuar Musa",
    "bimol gading": "Bimol Akem Kelulut",
    "muhammad ismi mat taib": "Ismi Mat Taib",
    "yusuf abd wahab": "Fadillah Yusof",
    "gapari katingan": "Geoffrey Kitingan",
}
