"""
Camara dos Deputados Sync

Pulls recently presented propositions from the Camara open data API
(https://dadosabertos.camara.leg.br/api/v2) and upserts them by camara_id:
- List endpoint per type (PL, PEC, MP, PLP), following "next" links
- Detail endpoint per proposition, fetched with a small worker pool
- First listed author, best effort

A proposition whose detail cannot be fetched is logged and skipped; the
rest of the batch is still saved.
"""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from datetime import date, datetime, timedelta
from typing import Dict, List, Optional

import requests
from flask import current_app

from pauta import db
from pauta.lib.time import utcnow_naive, to_naive_utc
from pauta.models import Proposition

logger = logging.getLogger(__name__)

PROPOSITION_TYPES = ('PL', 'PEC', 'MP', 'PLP')
DEFAULT_STATUS = 'Em tramitação'
DETAIL_CONCURRENCY = 5


class CamaraAPIError(Exception):
    """Transport or HTTP failure talking to the Camara API."""
    pass


class CamaraClient:
    """
    Thin client for the Camara open data API.

    Usage:
        client = CamaraClient.from_config(current_app.config)
        items = client.list_propositions('PL', '2025-01-01', '2025-01-10')
    """

    DEFAULT_BASE_URL = 'https://dadosabertos.camara.leg.br/api/v2'
    ITEMS_PER_PAGE = 100
    REQUEST_TIMEOUT = 15  # seconds

    def __init__(self, base_url: str = None, user_agent: str = None,
                 timeout: int = None, session: requests.Session = None):
        self.base_url = (base_url or self.DEFAULT_BASE_URL).rstrip('/')
        self.timeout = timeout or self.REQUEST_TIMEOUT
        self.session = session or requests.Session()
        self.session.headers.update({'Accept': 'application/json'})
        if user_agent:
            self.session.headers.update({'User-Agent': user_agent})

    @classmethod
    def from_config(cls, config) -> 'CamaraClient':
        return cls(
            base_url=config.get('CAMARA_API_BASE'),
            user_agent=config.get('CAMARA_API_USER_AGENT'),
            timeout=config.get('CAMARA_REQUEST_TIMEOUT'),
        )

    def get_json(self, url: str, params: Dict = None) -> Dict:
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except requests.exceptions.RequestException as e:
            raise CamaraAPIError(f"Camara API request failed: {url} - {e}") from e

    def list_propositions(self, sigla_tipo: str, start_date: str, end_date: str) -> List[Dict]:
        """All list items of one type presented between start_date and end_date (inclusive)."""
        url = f"{self.base_url}/proposicoes"
        params = {
            'siglaTipo': sigla_tipo,
            'dataApresentacaoInicio': start_date,
            'dataApresentacaoFim': end_date,
            'ordem': 'DESC',
            'itens': self.ITEMS_PER_PAGE,
        }

        items = []
        while url:
            page = self.get_json(url, params=params)
            items.extend(page.get('dados') or [])
            # "next" links already carry the query string
            url = next((link.get('href') for link in page.get('links') or []
                        if link.get('rel') == 'next'), None)
            params = None

        # The API matches siglaTipo loosely; keep exact matches only
        return [item for item in items if item.get('siglaTipo') == sigla_tipo]

    def get_proposition(self, camara_id: int) -> Dict:
        return self.get_json(f"{self.base_url}/proposicoes/{camara_id}").get('dados') or {}

    def get_authors(self, uri: str) -> List[Dict]:
        return self.get_json(uri).get('dados') or []


def _parse_status_datetime(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    try:
        return to_naive_utc(datetime.fromisoformat(value.replace('Z', '+00:00')))
    except ValueError:
        logger.warning(f"Failed to parse Camara status date: {value}")
        return None


def _parse_keywords(value: Optional[str]) -> Optional[List[str]]:
    if not value:
        return None
    tokens = [token.strip() for token in value.replace(';', ',').split(',')]
    tokens = [token for token in tokens if token]
    return tokens or None


def normalize_proposition(detail: Dict, author: Optional[Dict] = None,
                          today: Optional[date] = None) -> Dict:
    """
    Map a Camara detail payload onto Proposition column values.

    Raises:
        ValueError: unsupported proposition type
    """
    sigla_tipo = detail.get('siglaTipo')
    if sigla_tipo not in PROPOSITION_TYPES:
        raise ValueError(f"Unsupported proposition type: {sigla_tipo}")

    status = detail.get('statusProposicao') or {}
    author = author or {}
    presented = detail.get('dataApresentacao')
    presentation_date = (
        date.fromisoformat(presented.split('T')[0]) if presented
        else (today or utcnow_naive().date())
    )
    number = int(detail.get('numero'))
    year = int(detail.get('ano'))

    return {
        'camara_id': detail['id'],
        'type': sigla_tipo,
        'sigla_tipo': sigla_tipo,
        'number': number,
        'year': year,
        'title': detail.get('ementa') or f"Proposição {sigla_tipo} {number}/{year}",
        'ementa': detail.get('ementa'),
        'ementa_detalhada': detail.get('ementaDetalhada'),
        'keywords': _parse_keywords(detail.get('keywords')),
        'presentation_date': presentation_date,
        'status': status.get('descricaoSituacao') or DEFAULT_STATUS,
        'status_situation': status.get('descricaoTramitacao'),
        'status_code': status.get('codSituacao'),
        'status_date': _parse_status_datetime(status.get('dataHora')),
        'origin': status.get('siglaOrgao'),
        'author': author.get('nome'),
        'author_party': author.get('siglaPartido'),
        'author_state': author.get('siglaUf'),
        'theme': detail.get('descricaoTipo'),
        'source_url': detail.get('urlInteiroTeor'),
        'full_text_url': detail.get('urlInteiroTeor'),
        'tramitacao_url': status.get('url'),
    }


def fetch_normalized_proposition(client: CamaraClient, camara_id: int,
                                 today: Optional[date] = None) -> Dict:
    detail = client.get_proposition(camara_id)

    author = None
    if detail.get('uriAutores'):
        try:
            authors = client.get_authors(detail['uriAutores'])
            author = authors[0] if authors else None
        except CamaraAPIError as e:
            logger.warning(f"Failed to fetch authors for proposition {camara_id}: {e}")

    return normalize_proposition(detail, author, today=today)


def _upsert_proposition(values: Dict, fetched_at: datetime) -> str:
    proposition = Proposition.query.filter_by(camara_id=values['camara_id']).first()
    if proposition:
        for key, value in values.items():
            setattr(proposition, key, value)
        proposition.fetched_at = fetched_at
        return 'updated'

    db.session.add(Proposition(house='camara', fetched_at=fetched_at, **values))
    return 'created'


def sync_recent_propositions(days: int = None, prune: bool = False,
                             client: CamaraClient = None,
                             today: Optional[date] = None) -> Dict[str, int]:
    """
    Sync propositions presented in the last `days` days.

    Args:
        days: Window size (defaults to SYNC_WINDOW_DAYS)
        prune: Delete propositions presented before the window
        client: Camara client (built from app config if omitted)
        today: End of the window (defaults to the current UTC date)

    Returns:
        Stats dict: {'fetched', 'created', 'updated', 'pruned', 'errors'}
    """
    days = days if days is not None else current_app.config.get('SYNC_WINDOW_DAYS', 10)
    client = client or CamaraClient.from_config(current_app.config)
    today = today or utcnow_naive().date()
    start = today - timedelta(days=days)

    stats = {'fetched': 0, 'created': 0, 'updated': 0, 'pruned': 0, 'errors': 0}

    camara_ids = []
    seen = set()
    for sigla_tipo in PROPOSITION_TYPES:
        for item in client.list_propositions(sigla_tipo, start.isoformat(), today.isoformat()):
            if item.get('id') is not None and item['id'] not in seen:
                seen.add(item['id'])
                camara_ids.append(item['id'])

    normalized = []
    with ThreadPoolExecutor(max_workers=DETAIL_CONCURRENCY) as executor:
        futures = {
            executor.submit(fetch_normalized_proposition, client, camara_id, today): camara_id
            for camara_id in camara_ids
        }
        for future in as_completed(futures):
            camara_id = futures[future]
            try:
                normalized.append(future.result())
            except (CamaraAPIError, ValueError, KeyError, TypeError) as e:
                logger.warning(f"Skipping proposition {camara_id}: {e}")
                stats['errors'] += 1

    stats['fetched'] = len(normalized)
    fetched_at = utcnow_naive()

    try:
        for values in normalized:
            stats[_upsert_proposition(values, fetched_at)] += 1

        if prune:
            stale = Proposition.query.filter(Proposition.presentation_date < start).all()
            for proposition in stale:
                db.session.delete(proposition)
            stats['pruned'] = len(stale)

        db.session.commit()
    except Exception:
        db.session.rollback()
        raise

    logger.info(f"Camara sync complete ({start} to {today}): {stats}")
    return stats
