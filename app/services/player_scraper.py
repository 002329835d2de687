"""Scrape NBA per-game player stats from basketball-reference.

The season page has one ``per_game_stats`` table. Players traded mid-season
appear several times: first a combined row (team ``2TM``/``3TM``, or
``TOT`` on older pages) followed by one row per team. Only the first row per
player is kept.
"""

import logging
import re
from typing import List, Optional, Set

import httpx
from bs4 import BeautifulSoup, Tag
from pydantic import ValidationError

from app.config import settings
from app.models.players import PlayerCreate

logger = logging.getLogger(__name__)

TABLE_ID = "per_game_stats"

# data-stat names, current page layout first, then legacy
NAME_STATS = ("name_display", "player")
TEAM_STATS = ("team_name_abbr", "team_id")
GAMES_STATS = ("games", "g")

_NUMERIC_RE = re.compile(r"^[-+]?\d*\.?\d+$")


class ScrapeError(Exception):
    """Fetching or parsing the external player source failed."""


def _client(timeout: float) -> httpx.AsyncClient:
    headers = {"User-Agent": settings.scrape_user_agent}
    return httpx.AsyncClient(headers=headers, timeout=timeout, follow_redirects=True)


def _cell(row: Tag, *stats: str) -> Optional[Tag]:
    for stat in stats:
        cell = row.find(["td", "th"], attrs={"data-stat": stat})
        if cell is not None:
            return cell
    return None


def _text(row: Tag, *stats: str) -> Optional[str]:
    cell = _cell(row, *stats)
    if cell is None:
        return None
    text = cell.get_text(" ", strip=True)
    return text or None


def _to_int(value: Optional[str]) -> Optional[int]:
    if value is None or not _NUMERIC_RE.match(value):
        return None
    return int(float(value))


def _to_float(value: Optional[str]) -> Optional[float]:
    if value is None or not _NUMERIC_RE.match(value):
        return None
    return float(value)


def _is_header_row(row: Tag) -> bool:
    classes = row.get("class") or []
    return "thead" in classes or "over_header" in classes


def parse_per_game_html(html: str) -> List[PlayerCreate]:
    """Parse the per-game stats page into player records.

    Raises:
        ScrapeError: if the stats table is missing or contains no players
    """
    soup = BeautifulSoup(html, "html.parser")
    table = soup.find("table", id=TABLE_ID)
    if table is None:
        raise ScrapeError(f"table #{TABLE_ID} not found in source page")

    body = table.find("tbody") or table
    players: List[PlayerCreate] = []
    seen: Set[str] = set()

    for row in body.find_all("tr"):
        if _is_header_row(row):
            continue
        name_cell = _cell(row, *NAME_STATS)
        if name_cell is None:
            continue
        name = name_cell.get_text(" ", strip=True)
        if not name or name == "League Average":
            continue

        slug = name_cell.get("data-append-csv") or None
        key = slug or name
        if key in seen:
            continue

        try:
            player = PlayerCreate(
                name=name,
                source_slug=slug,
                position=_text(row, "pos"),
                age=_to_int(_text(row, "age")),
                team=_text(row, *TEAM_STATS),
                games=_to_int(_text(row, *GAMES_STATS)),
                points=_to_float(_text(row, "pts_per_g")),
                rebounds=_to_float(_text(row, "trb_per_g")),
                assists=_to_float(_text(row, "ast_per_g")),
            )
        except ValidationError as exc:
            raise ScrapeError(f"invalid player row for {name!r}: {exc}") from exc

        seen.add(key)
        players.append(player)

    if not players:
        raise ScrapeError(f"table #{TABLE_ID} contained no player rows")
    return players


async def get_player_data(
    client: Optional[httpx.AsyncClient] = None,
    url: Optional[str] = None,
) -> List[PlayerCreate]:
    """Download the source page once and return the parsed players.

    No retry is attempted; any network, HTTP status or parse failure is
    raised as ``ScrapeError``.
    """
    url = url or settings.scrape_url
    logger.info(f"Fetching player data from {url}")

    owns_client = client is None
    http = client or _client(settings.scrape_timeout)
    try:
        resp = await http.get(url)
        resp.raise_for_status()
    except httpx.HTTPError as exc:
        raise ScrapeError(f"failed to fetch {url}: {exc}") from exc
    finally:
        if owns_client:
            await http.aclose()

    players = parse_per_game_html(resp.text)
    logger.info(f"Parsed {len(players)} players from source")
    return players
