"""Static catalog of artwork categories under review.

Artwork identifiers are ``<prefix><n>`` (e.g. ``abs-7``); the prefix alone
decides the category, so reporting code never needs the full image table.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

UNKNOWN_CATEGORY = "Other"

IMAGE_BASE_URL = "https://res.cloudinary.com/dejobxzdr/image/upload"


@dataclass(frozen=True)
class Category:
    """One reviewable set of artworks."""

    slug: str
    title: str
    prefix: str
    image_count: int
    color: str = "stone"
    description: str = ""

    @property
    def artwork_ids(self) -> List[str]:
        return [f"{self.prefix}{i}" for i in range(1, self.image_count + 1)]

    def owns(self, artwork_id: str) -> bool:
        return artwork_id.startswith(self.prefix)


CATEGORIES: Tuple[Category, ...] = (
    Category(
        slug="books-as-art",
        title="Books as Art",
        prefix="book-",
        image_count=30,
        color="amber",
        description="Sculptural book pieces and literary-inspired artworks that honor the firm's intellectual heritage.",
    ),
    Category(
        slug="delaware-artists",
        title="Delaware Artists",
        prefix="de-",
        image_count=42,
        color="emerald",
        description="Works by contemporary Delaware artists, connecting the firm to its local creative community.",
    ),
    Category(
        slug="freestanding-sculpture",
        title="Freestanding Sculpture",
        prefix="free-",
        image_count=18,
        color="sky",
        description="Three-dimensional works for lobbies, conference areas, and circulation spaces.",
    ),
    Category(
        slug="dimensional-relief",
        title="Dimensional Relief",
        prefix="dim-",
        image_count=32,
        color="rose",
        description="Wall-mounted sculptural pieces adding depth and texture to key locations.",
    ),
    Category(
        slug="grid-modular",
        title="Grid & Modular",
        prefix="grid-",
        image_count=30,
        color="violet",
        description="Systematic arrangements and repeating compositions for larger wall expanses.",
    ),
    Category(
        slug="abstract-paintings",
        title="Abstract Paintings",
        prefix="abs-",
        image_count=32,
        color="orange",
        description="Contemporary abstract works in various scales for office and common areas.",
    ),
    Category(
        slug="surrealism",
        title="Surrealism",
        prefix="surr-",
        image_count=33,
        color="indigo",
        description="Dream-like imagery and unexpected juxtapositions that spark curiosity and conversation.",
    ),
    Category(
        slug="impressionist",
        title="Impressionist",
        prefix="impr-",
        image_count=18,
        color="teal",
        description="Light-filled landscapes and atmospheric scenes in the impressionist tradition.",
    ),
)

# Uploaded assets whose public id carries a hash suffix.
_HASHED_PUBLIC_IDS: Dict[str, str] = {
    "impr-1": "impr-1_mjynof",
    "impr-2": "impr-2_vp2i1v",
    "impr-3": "impr-3_vd3fgs",
    "impr-4": "impr-4_zk1sad",
    "impr-5": "impr-5_mmemaf",
    "impr-6": "impr-6_bf74aq",
    "impr-7": "impr-7_pzokev",
    "impr-8": "impr-8_kmrld6",
    "impr-9": "impr-9_iqzw00",
    "impr-10": "impr-10_ffvd3b",
    "impr-11": "impr-11_plopfb",
    "impr-12": "impr-12_qo7fxn",
    "impr-13": "impr-13_pjwwly",
    "impr-14": "impr-14_b3lari",
    "impr-15": "impr-15_qcohj8",
    "impr-16": "impr-16_u5jaeo",
    "impr-17": "impr-17_ywil9d",
    "impr-18": "impr-18_ihmagr",
    "surr-1": "surr-1_vt80fk",
    "surr-2": "surr-2_xjodb8",
    "surr-3": "surr-3_kqgqlr",
    "surr-4": "surr-4_t0oldo",
    "surr-5": "surr-5_quvqo4",
    "surr-6": "surr-6_t2hb5g",
    "surr-7": "surr-7_dvfczi",
    "surr-8": "surr-8_lgam10",
    "surr-9": "surr-9_dx4l5k",
    "surr-10": "surr-10_brvjxw",
    "surr-11": "surr-11_u8c7sw",
    "surr-12": "surr-12_hsamor",
    "surr-13": "surr-13_tftbxl",
    "surr-14": "surr-14_hvr2ys",
    "surr-15": "surr-15_aj498f",
    "surr-16": "surr-16_afgtuf",
    "surr-17": "surr-17_kinuq5",
    "surr-18": "surr-18_c88b9d",
    "surr-19": "surr-19_eiegur",
    "surr-20": "surr-20_w5wsbh",
    "surr-21": "surr-21_fsco2k",
    "surr-22": "surr-22_mk4fmt",
    "surr-23": "surr-23_zidxrd",
    "surr-24": "surr-24_yy29vc",
    "surr-25": "surr-25_kummql",
    "surr-26": "surr-26_oqyxuw",
    "surr-27": "surr-27_npcmau",
    "surr-28": "surr-28_pujvfa",
    "surr-29": "surr-29_objihb",
    "surr-30": "surr-30_lflmx4",
    "surr-31": "surr-31_niqnwq",
    "surr-32": "surr-32_vynxa7",
    "surr-33": "surr-33_uwhs8n",
}


def category_for_id(artwork_id: str, default: str = UNKNOWN_CATEGORY) -> str:
    """Return the category title for *artwork_id*, or *default* (``"Other"``)."""
    for category in CATEGORIES:
        if category.owns(artwork_id):
            return category.title
    return default


def get_category(slug: str) -> Optional[Category]:
    for category in CATEGORIES:
        if category.slug == slug:
            return category
    return None


def total_artworks() -> int:
    return sum(c.image_count for c in CATEGORIES)


def image_url(artwork_id: str) -> str:
    """Return the hosted image URL for *artwork_id*."""
    public_id = _HASHED_PUBLIC_IDS.get(artwork_id, artwork_id)
    return f"{IMAGE_BASE_URL}/{public_id}.png"
