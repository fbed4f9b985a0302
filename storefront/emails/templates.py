from html import escape
from typing import Iterable, Tuple

# module storefront.emails.templates
def render_download_email(links: Iterable[Tuple[str, str]]) -> str:
    """HTML de l'email de livraison: une entrée <li> par (nom, url)."""
    items = "".join(
        f'<li style="margin-bottom:8px"><a href="{escape(url, quote=True)}" style="color:#D4AF37">{escape(name)}</a></li>'
        for name, url in links
    )
    return f"""
        <div style="background:#0a0a0a;padding:40px;font-family:monospace;color:white;max-width:600px;margin:0 auto">
          <h1 style="color:#D4AF37;font-size:2rem;letter-spacing:0.1em;margin-bottom:0.5rem">JACKPOT</h1>
          <p style="color:rgba(255,255,255,0.5);font-size:0.8rem;letter-spacing:0.2em;text-transform:uppercase;margin-bottom:2rem">
            Your purchase is confirmed
          </p>
          <p style="color:rgba(255,255,255,0.7);margin-bottom:1rem">
            Here are your download links:
          </p>
          <ul style="color:white;padding-left:1.5rem;margin-bottom:2rem">
            {items}
          </ul>
          <p style="color:rgba(255,255,255,0.3);font-size:0.75rem">
            Links are for personal use only. Do not share.<br/>
            JoedankBeats
          </p>
        </div>
    """
