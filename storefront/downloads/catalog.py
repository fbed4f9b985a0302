"""
Liens de livraison des produits numériques (beats, drum-kits).
Renseigné au déploiement; surchargeable par un fichier JSON (DOWNLOAD_LINKS_FILE).
Clé d'affichage en MAJUSCULES, id identique à celui des lignes du panier.
"""

# module storefront.downloads.catalog
DIGITAL_PRODUCTS = [
    # Beats (id panier: "beat-<dossier>")
    {"id": "beat-blood-money", "name": "BLOOD MONEY", "url": "https://downloads.joedankbeats.com/beats/blood-money.zip"},
    {"id": "beat-golden-hour", "name": "GOLDEN HOUR", "url": "https://downloads.joedankbeats.com/beats/golden-hour.zip"},
    {"id": "beat-roulette", "name": "ROULETTE", "url": "https://downloads.joedankbeats.com/beats/roulette.zip"},
    {"id": "beat-diamond-teeth", "name": "DIAMOND TEETH", "url": "https://downloads.joedankbeats.com/beats/diamond-teeth.zip"},
    {"id": "beat-lucky-seven", "name": "LUCKY SEVEN", "url": "https://downloads.joedankbeats.com/beats/lucky-seven.zip"},
    {"id": "beat-ace-of-spades", "name": "ACE OF SPADES", "url": "https://downloads.joedankbeats.com/beats/ace-of-spades.zip"},
    # Drum-kits
    {"id": "dk-001", "name": "INFERNO 808 KIT", "url": "https://downloads.joedankbeats.com/kits/inferno-808.zip"},
    {"id": "dk-002", "name": "VELVET NOIR KIT", "url": "https://downloads.joedankbeats.com/kits/velvet-noir.zip"},
    {"id": "dk-003", "name": "CHROME GOD KIT", "url": "https://downloads.joedankbeats.com/kits/chrome-god.zip"},
]

DOWNLOAD_LINKS = {p["name"]: p["url"] for p in DIGITAL_PRODUCTS}
