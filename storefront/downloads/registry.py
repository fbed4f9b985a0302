"""
Registre des liens de téléchargement: lecture seule à l'exécution.
- Résolution par id produit stable (metadata internal_id) puis par nom normalisé.
- Un produit inconnu n'est pas une erreur: retourne None.
"""
import json
import logging
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Optional

from storefront.config import DOWNLOAD_LINKS_FILE
from .catalog import DIGITAL_PRODUCTS

logger = logging.getLogger(__name__)

# module storefront.downloads.registry
def normalize_name(name: Optional[str]) -> str:
    return " ".join((name or "").split()).upper()


class DownloadLinkRegistry:
    def __init__(self, products: Iterable[Mapping[str, Any]]):
        by_name: Dict[str, str] = {}
        by_id: Dict[str, str] = {}
        for p in products:
            url = str(p.get("url") or "").strip()
            if not url:
                continue
            name = normalize_name(p.get("name"))
            if name:
                by_name[name] = url
            pid = str(p.get("id") or "").strip()
            if pid:
                by_id[pid] = url
        self._by_name = MappingProxyType(by_name)
        self._by_id = MappingProxyType(by_id)

    def __len__(self) -> int:
        return len(self._by_name)

    @property
    def links(self) -> Mapping[str, str]:
        return self._by_name

    def lookup(self, name: Optional[str]) -> Optional[str]:
        return self._by_name.get(normalize_name(name))

    def lookup_id(self, product_id: Optional[str]) -> Optional[str]:
        if not product_id:
            return None
        return self._by_id.get(product_id)

    def resolve(self, product_id: Optional[str], name: Optional[str]) -> Optional[str]:
        """Id stable d'abord; le nom d'affichage ne sert que de repli."""
        return self.lookup_id(product_id) or self.lookup(name)


def load_products(path: Optional[str] = None) -> list:
    """
    Charge les produits depuis un JSON [{id, name, url}] ou {NAME: url}.
    Sans fichier configuré: catalogue statique embarqué.
    """
    path = path or DOWNLOAD_LINKS_FILE
    if not path:
        return list(DIGITAL_PRODUCTS)
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if isinstance(data, dict):
        data = [{"name": k, "url": v} for k, v in data.items()]
    logger.info("downloads.registry loaded %s products from %s", len(data), path)
    return data


@lru_cache(maxsize=1)
def get_registry() -> DownloadLinkRegistry:
    return DownloadLinkRegistry(load_products())
