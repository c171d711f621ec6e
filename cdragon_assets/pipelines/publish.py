"""API reference publishing over a written data tree.

Builds the route map and OpenAPI document describing the static JSON tree and
writes the landing page that renders it.
"""

import logging
from pathlib import Path
from string import Template
from typing import Any, Dict, List, Optional

from ..core.constants import APP_URL, INDEX_PAGE_FILE, OPENAPI_FILE, VERSION_FILE, WIKI_SKIN_DATA_FILE
from ..core.exceptions import CrawlerError
from .storage import AssetStorage

logger = logging.getLogger(__name__)

OPENAPI_VERSION = "3.0.3"

API_TAGS = [
    {"name": "Version", "description": "Version-related information"},
    {"name": "Champions", "description": "Champion-related data"},
    {"name": "Skins", "description": "Skin-related data"},
    {"name": "Skinlines", "description": "Skinline-related data"},
    {"name": "Universe", "description": "Universe-related data"},
    {"name": "Wiki", "description": "Wiki-related data"},
]

# category -> (tag, plural noun, path parameter, parameter description, schema stem)
CATEGORY_ENDPOINTS = {
    "champion": (
        "Champions",
        "champions",
        "championAlias",
        "Champion alias (usually the champion name, e.g., Aatrox)",
        "Champion",
    ),
    "skin": ("Skins", "skins", "skinId", "Skin ID (numeric ID, e.g., 1000, 10001)", "Skin"),
    "skinline": (
        "Skinlines",
        "skinlines",
        "skinlineId",
        "Skinline ID (numeric ID, e.g., 0, 1, 10)",
        "Skinline",
    ),
    "universe": (
        "Universe",
        "universes",
        "universeId",
        "Universe ID (numeric ID, e.g., 0, 1, 10)",
        "Universe",
    ),
}

LOCALE_PARAMETER_REF = {"$ref": "#/components/parameters/locale"}


def generate_api_routes(storage: AssetStorage) -> Dict[str, Dict[str, Any]]:
    """Map every servable URL path of the tree to a description of its content.

    Locales are the subdirectories of the data directory; categories are the
    subdirectories of the first locale.
    """
    routes: Dict[str, Dict[str, Any]] = {
        f"/{VERSION_FILE}": {"type": "version", "file": VERSION_FILE},
        f"/{WIKI_SKIN_DATA_FILE}": {"type": "wiki", "file": WIKI_SKIN_DATA_FILE},
    }

    locales = storage.list_locales()
    if not locales:
        return routes
    categories = storage.list_categories(locales[0])

    for locale in locales:
        for category in categories:
            keys = storage.list_keys(locale, category)
            if not keys:
                continue
            routes[f"/{locale}/{category}.json"] = {
                "type": "list",
                "category": category,
                "locale": locale,
                "count": len(keys),
            }
            for key in keys:
                routes[f"/{locale}/{category}/{key}.json"] = {
                    "type": "item",
                    "category": category,
                    "locale": locale,
                    "id": key,
                    "file": f"{locale}/{category}/{key}.json",
                }

    return routes


def _json_response(description: str, schema: Dict[str, Any]) -> Dict[str, Any]:
    return {"description": description, "content": {"application/json": {"schema": schema}}}


def _not_found(noun: str) -> Dict[str, Any]:
    return _json_response(f"{noun} not found", {"$ref": "#/components/schemas/Error"})


def build_paths(categories: List[str]) -> Dict[str, Any]:
    paths: Dict[str, Any] = {
        f"/{VERSION_FILE}": {
            "get": {
                "summary": "Get current data version",
                "description": "Returns version information about the current API data",
                "operationId": "getVersion",
                "tags": ["Version"],
                "responses": {
                    "200": _json_response(
                        "Successfully retrieved version information",
                        {"$ref": "#/components/schemas/Version"},
                    )
                },
            }
        },
        f"/{WIKI_SKIN_DATA_FILE}": {
            "get": {
                "summary": "Get Wiki skin data",
                "description": "Returns skin-related data compiled from the League of Legends Wiki",
                "operationId": "getWikiSkinData",
                "tags": ["Wiki"],
                "responses": {
                    "200": _json_response(
                        "Successfully retrieved Wiki skin data",
                        {"type": "object", "description": "Wiki skin data"},
                    )
                },
            }
        },
    }

    for category in categories:
        if category not in CATEGORY_ENDPOINTS:
            continue
        tag, plural, param, param_description, schema = CATEGORY_ENDPOINTS[category]

        paths[f"/{{locale}}/{category}.json"] = {
            "get": {
                "summary": f"Get all {plural}",
                "description": f"Returns a list of all {plural} in the specified language",
                "operationId": f"get{schema}s",
                "tags": [tag],
                "parameters": [LOCALE_PARAMETER_REF],
                "responses": {
                    "200": _json_response(
                        f"Successfully retrieved {category} list",
                        {"$ref": f"#/components/schemas/{schema}Summary"},
                    )
                },
            }
        }
        paths[f"/{{locale}}/{category}/{{{param}}}.json"] = {
            "get": {
                "summary": f"Get specific {category} details",
                "description": (
                    f"Returns detailed information about a specific {category} "
                    "in the specified language"
                ),
                "operationId": f"get{schema}ById",
                "tags": [tag],
                "parameters": [
                    LOCALE_PARAMETER_REF,
                    {
                        "name": param,
                        "in": "path",
                        "required": True,
                        "description": param_description,
                        "schema": {"type": "string"},
                    },
                ],
                "responses": {
                    "200": _json_response(
                        f"Successfully retrieved {category} details",
                        {"$ref": f"#/components/schemas/{schema}"},
                    ),
                    "404": _not_found(schema),
                },
            }
        }

    return paths


def _summary_schema(noun: str, plural: str, item_properties: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "type": "object",
        "description": f"{noun} summary information",
        "properties": {
            "total": {"type": "number", "description": f"Total number of {plural}"},
            plural: {
                "type": "array",
                "items": {"type": "object", "properties": item_properties},
            },
        },
    }


def build_schemas() -> Dict[str, Any]:
    id_name = {"id": {"type": "number"}, "name": {"type": "string"}}
    return {
        "Error": {
            "type": "object",
            "required": ["code", "message"],
            "properties": {
                "code": {"type": "integer", "format": "int32"},
                "message": {"type": "string"},
            },
        },
        "Version": {
            "type": "object",
            "description": "API data version information",
            "properties": {
                "version": {"type": "string", "description": "API data version"},
                "crawledAt": {
                    "type": "string",
                    "description": "API data crawled at",
                    "format": "date-time",
                },
            },
        },
        "ChampionSummary": _summary_schema(
            "Champion", "champions", {**id_name, "alias": {"type": "string"}}
        ),
        "Champion": {
            "type": "object",
            "description": "Detailed champion information",
            "properties": {
                "id": {"type": "number", "description": "Champion ID"},
                "name": {"type": "string", "description": "Champion name"},
                "alias": {"type": "string", "description": "Champion alias"},
                "squarePortraitPath": {
                    "type": "string",
                    "description": "Champion square portrait path",
                },
                "skins": {"type": "array", "items": {"type": "object"}},
            },
        },
        "SkinSummary": _summary_schema(
            "Skin",
            "skins",
            {**id_name, "rarity": {"type": "string"}, "isBase": {"type": "boolean"}},
        ),
        "Skin": {
            "type": "object",
            "description": "Detailed skin information",
            "properties": {
                "id": {"type": "number", "description": "Skin ID"},
                "name": {"type": "string", "description": "Skin name"},
                "wikiSkinData": {"type": "object", "description": "Wiki annotations"},
            },
        },
        "SkinlineSummary": _summary_schema("Skinline", "skinlines", id_name),
        "Skinline": {
            "type": "object",
            "description": "Detailed skinline information",
            "properties": {
                "id": {"type": "number", "description": "Skinline ID"},
                "name": {"type": "string", "description": "Skinline name"},
                "skins": {"type": "array", "items": {"type": "object"}},
            },
        },
        "UniverseSummary": _summary_schema("Universe", "universes", id_name),
        "Universe": {
            "type": "object",
            "description": "Detailed universe information",
            "properties": {
                "id": {"type": "number", "description": "Universe ID"},
                "name": {"type": "string", "description": "Universe name"},
                "skinlines": {"type": "array", "items": {"type": "object"}},
            },
        },
    }


def build_openapi_doc(
    locales: List[str], categories: List[str], version: str, app_url: str = APP_URL
) -> Dict[str, Any]:
    return {
        "openapi": OPENAPI_VERSION,
        "info": {
            "title": "CDragon Assets API",
            "description": (
                "League of Legends game resource data API, providing data from "
                "communitydragon.org including champions, skins, skinlines, and universe data"
            ),
            "version": version,
            "contact": {"name": "CDragon Assets"},
        },
        "servers": [{"url": app_url, "description": "Production API server"}],
        "tags": API_TAGS,
        "paths": build_paths(categories),
        "components": {
            "parameters": {
                "locale": {
                    "name": "locale",
                    "in": "path",
                    "required": True,
                    "description": "Language/locale code",
                    "schema": {"type": "string", "enum": locales, "default": "default"},
                }
            },
            "schemas": build_schemas(),
        },
    }


async def generate_openapi_doc(storage: AssetStorage, app_url: str = APP_URL) -> Path:
    """Write ``openapi.json`` describing the tree under ``storage``."""
    locales = storage.list_locales()
    if not locales:
        raise CrawlerError(f"No locale directories found in {storage.base_path}")
    categories = storage.list_categories(locales[0])

    marker = await storage.read_version_marker()
    version = marker.version if marker else "unknown"

    routes = generate_api_routes(storage)
    logger.info(f"Generated {len(routes)} API routes")
    logger.info(f"Available locales: {', '.join(locales)}")
    logger.info(f"Available categories: {', '.join(categories)}")

    doc = build_openapi_doc(locales, categories, version, app_url)
    path = await storage.write_json(OPENAPI_FILE, doc)
    logger.info(f"OpenAPI document written to {path}")
    return path


INDEX_TEMPLATE = Template(
    """<!doctype html>
<html>
  <head>
    <title>CDragon Assets API Reference</title>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <style>
      :root {
        --scalar-custom-header-height: 60px;
      }
      body {
        margin: 0;
        padding: 0;
        font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, Helvetica, Arial, sans-serif;
      }
      .custom-header {
        height: var(--scalar-custom-header-height);
        display: flex;
        justify-content: space-between;
        align-items: center;
        padding: 0 16px;
        position: sticky;
        top: 0;
        z-index: 100;
        box-shadow: inset 0 -1px 0 var(--scalar-border-color);
      }
      .header-nav a {
        margin-left: 24px;
        text-decoration: none;
        font-size: 14px;
      }
    </style>
  </head>
  <body>
    <header class="custom-header scalar-app">
      <div class="header-title">CDragon-Assets API Reference</div>
      <nav class="header-nav">
        <a href="https://league-fan.github.io">League-Fan</a>
        <a href="https://communitydragon.org">CDragon</a>
        <a href="https://github.com/league-fan">GitHub</a>
      </nav>
    </header>
    <script id="api-reference" data-url="$openapi_url"></script>
    <script src="https://cdn.jsdelivr.net/npm/@scalar/api-reference"></script>
  </body>
</html>
"""
)


def render_index_page(app_url: str = APP_URL) -> str:
    return INDEX_TEMPLATE.substitute(openapi_url=f"{app_url.rstrip('/')}/{OPENAPI_FILE}")


async def generate_index_page(storage: AssetStorage, app_url: str = APP_URL) -> Path:
    """Write the ``index.html`` landing page that renders the OpenAPI document."""
    path = await storage.write_text(INDEX_PAGE_FILE, render_index_page(app_url))
    logger.info(f"Index page generated: {path}")
    return path


async def publish(storage: AssetStorage, app_url: Optional[str] = None) -> Dict[str, Any]:
    """Regenerate both published artifacts; returns their paths and the route count."""
    app_url = app_url or APP_URL
    openapi_path = await generate_openapi_doc(storage, app_url)
    index_path = await generate_index_page(storage, app_url)
    return {
        "openapi": str(openapi_path),
        "index": str(index_path),
        "routes": len(generate_api_routes(storage)),
    }
