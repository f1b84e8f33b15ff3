"""UI constants for Invierte Ya.

These are kept small and utility-oriented.
"""

from __future__ import annotations

from typing import Final

BRAND: Final[str] = "📈 Invierte Ya"

NAV_ITEMS: Final[list[dict[str, str]]] = [
    {"path": "/dashboard", "label": "Dashboard"},
    {"path": "/funds", "label": "Fondos"},
    {"path": "/deposit", "label": "Depositar"},
    {"path": "/portfolio", "label": "Portafolio"},
    {"path": "/profile", "label": "Perfil"},
]

NOTIFICATION_OPTIONS: Final[dict[str, str]] = {
    "EMAIL": "📧 Email",
    "SMS": "📱 SMS",
}

FUND_CATEGORY_BLURBS: Final[dict[str, str]] = {
    "FPV": "Ideal para ahorrar para tu pensión con beneficios tributarios.",
    "FIC": "Diversifica tu portafolio con gestión profesional de inversiones.",
}


# Tailwind class constants
CARD: Final[str] = "bg-white rounded-lg shadow-sm border border-slate-200"
CARD_PAD: Final[str] = "p-4"

TABLE: Final[str] = "w-full"

PAGE_TITLE: Final[str] = "text-xl font-semibold text-slate-900"
SECTION_TITLE: Final[str] = "text-sm font-semibold text-slate-700"
STAT_LABEL: Final[str] = "text-xs uppercase tracking-wide text-slate-500"
STAT_VALUE: Final[str] = "text-2xl font-semibold text-slate-900"
MUTED: Final[str] = "text-slate-500"

BUTTON_PRIMARY: Final[str] = (
    "bg-blue-600 text-white hover:bg-blue-700 focus:ring-2 focus:ring-blue-300"
)
BUTTON_SECONDARY: Final[str] = (
    "bg-slate-200 text-slate-900 hover:bg-slate-300 focus:ring-2 focus:ring-slate-300"
)
BUTTON_DANGER: Final[str] = (
    "bg-rose-600 text-white hover:bg-rose-700 focus:ring-2 focus:ring-rose-300"
)

INPUT: Final[str] = "w-full"

ERROR_TEXT: Final[str] = "text-rose-700"
SUCCESS_TEXT: Final[str] = "text-emerald-700"

NAV_LINK: Final[str] = "px-3 py-2 rounded text-slate-700 hover:bg-slate-100 no-underline"
NAV_LINK_ACTIVE: Final[str] = "px-3 py-2 rounded bg-blue-50 text-blue-700 no-underline"
