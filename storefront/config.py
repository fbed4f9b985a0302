# storefront.config
from pathlib import Path
import os
from dotenv import load_dotenv

# Calculer le chemin du projet puis charger .env de manière explicite
BASE_DIR = Path(__file__).resolve().parent.parent
ENV_PATH = BASE_DIR / ".env"
load_dotenv(dotenv_path=ENV_PATH, override=False)

"""
Configuration centrale de la boutique.

- Charge le fichier .env à la racine du projet (BASE_DIR/.env)
- Normalise et expose les secrets (Stripe, Resend)
- Expose CORS/hosts, URLs de redirection du checkout et réglages Redis
"""

def _clean_env(v: str) -> str:
    """
    Nettoie une valeur d'environnement:
    - supprime les espaces et guillemets (simples, doubles) et backticks
    - retourne toujours une chaîne (jamais None)
    """
    return (v or "").strip().strip("'").strip('"').strip("`")

def _csv_env(name: str, default: str) -> list:
    return [p.strip() for p in os.getenv(name, default).split(",") if p.strip()]

# CORS / hosts
CORS_ORIGINS = _csv_env("CORS_ORIGINS", "*")
DEFAULT_ALLOWED_HOSTS = "localhost,127.0.0.1"
ALLOWED_HOSTS = _csv_env("ALLOWED_HOSTS", DEFAULT_ALLOWED_HOSTS)
COOKIE_SECURE = (os.getenv("COOKIE_SECURE", "false").lower() == "true")

# Stripe: clés publiques/privées et secret webhook
STRIPE_PUBLIC_KEY = _clean_env(os.getenv("STRIPE_PUBLIC_KEY") or os.getenv("NEXT_PUBLIC_STRIPE_PUBLISHABLE_KEY") or "")
STRIPE_SECRET_KEY = _clean_env(os.getenv("STRIPE_SECRET_KEY") or "")
STRIPE_WEBHOOK_SECRET = _clean_env(os.getenv("STRIPE_WEBHOOK_SECRET") or "")
STRIPE_API_VERSION = _clean_env(os.getenv("STRIPE_API_VERSION") or "")

# Devise unique de la boutique (montants Stripe en centimes)
CURRENCY = "usd"

# Pages de succès/annulation du checkout (le placeholder est substitué par Stripe)
BASE_URL = _clean_env(os.getenv("BASE_URL") or "http://localhost:3000")
CHECKOUT_SUCCESS_PATH = os.getenv("CHECKOUT_SUCCESS_PATH", "/checkout/success?session_id={CHECKOUT_SESSION_ID}")
CHECKOUT_CANCEL_PATH = os.getenv("CHECKOUT_CANCEL_PATH", "/#beats")
ALLOWED_SHIPPING_COUNTRIES = _csv_env("ALLOWED_SHIPPING_COUNTRIES", "US,CA,GB,AU,DE,FR")

# Resend: envoi des emails de livraison
RESEND_API_KEY = _clean_env(os.getenv("RESEND_API_KEY") or "")
RESEND_API_URL = _clean_env(os.getenv("RESEND_API_URL") or "https://api.resend.com/emails")
EMAIL_FROM = os.getenv("EMAIL_FROM", "JoedankBeats <onboarding@resend.dev>")
DOWNLOAD_EMAIL_SUBJECT = os.getenv("DOWNLOAD_EMAIL_SUBJECT", "🎰 Your JoedankBeats Download is Ready")

# Registre des liens de téléchargement (surcharge JSON optionnelle au déploiement)
DOWNLOAD_LINKS_FILE = _clean_env(os.getenv("DOWNLOAD_LINKS_FILE") or "")

# Redis: rate limiting + évènements webhook déjà traités
REDIS_URL = _clean_env(os.getenv("REDIS_URL") or os.getenv("RATE_LIMIT_REDIS_URL") or "redis://127.0.0.1:6379/0")
PROCESSED_EVENT_TTL_SECONDS = int(os.getenv("PROCESSED_EVENT_TTL_SECONDS", str(7 * 24 * 3600)))
# Réservation "processing" pendant la livraison: expire seule si le worker meurt
PROCESSED_EVENT_PROCESSING_TTL_SECONDS = int(os.getenv("PROCESSED_EVENT_PROCESSING_TTL_SECONDS", "60"))
