"""Fixed catalog of locales, patches and resource paths served by the mirror."""

from enum import Enum

CDRAGON_URL = "https://raw.communitydragon.org"
LOL_WIKI_URL = "https://wiki.leagueoflegends.com/en-us"
APP_URL = "https://league-fan.github.io/cdragon-assets"

LANGUAGES = (
    "ar_ae",
    "cs_cz",
    "de_de",
    "default",
    "el_gr",
    "en_au",
    "en_gb",
    "en_ph",
    "en_sg",
    "es_ar",
    "es_es",
    "es_mx",
    "fr_fr",
    "hu_hu",
    "id_id",
    "it_it",
    "ja_jp",
    "ko_kr",
    "pl_pl",
    "pt_br",
    "ro_ro",
    "ru_ru",
    "th_th",
    "tr_tr",
    "vi_vn",
    "zh_cn",
    "zh_my",
    "zh_tw",
)

PATCHES = ("latest", "pbe")

DEFAULT_LOCALES = ["zh_cn", "default", "zh_tw", "ja_jp", "ko_kr"]


class ResourcePath(str, Enum):
    """Resource JSON paths under the game-data plugin of a patch."""

    CHAMPION_SUMMARY = "v1/champion-summary.json"
    UNIVERSES = "v1/universes.json"
    SKINLINES = "v1/skinlines.json"
    SKINS = "v1/skins.json"
    ITEMS = "v1/items.json"
    TFT_ITEMS = "v1/tftitems.json"
    SUMMONER_EMOTES = "v1/summoner-emotes.json"
    SUMMONER_ICONS = "v1/summoner-icons.json"
    SUMMONER_ICON_SETS = "v1/summoner-icon-sets.json"
    TFT_CHAMPIONS = "v1/tftchampions.json"
    TFT_MAP_SKINS = "v1/tftmapskins.json"
    WARD_SKINS = "v1/ward-skins.json"
    WARD_SKIN_SETS = "v1/ward-skin-sets.json"


CONTENT_METADATA_PATH = "content-metadata.json"

VERSION_FILE = "version.json"
WIKI_SKIN_DATA_FILE = "wiki-skin-data.json"
OPENAPI_FILE = "openapi.json"
INDEX_PAGE_FILE = "index.html"

GAME_DATA_PLUGIN = "plugins/rcp-be-lol-game-data/global"
