"""Default transaction categories"""

from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True)
class Category:
    id: str
    name: str
    icon: str
    color: str


DEFAULT_CATEGORIES = (
    Category("1", "Alimentação", "🍔", "#f97316"),
    Category("2", "Transporte", "🚗", "#3b82f6"),
    Category("3", "Moradia", "🏠", "#8b5cf6"),
    Category("4", "Saúde", "💊", "#ef4444"),
    Category("5", "Educação", "📚", "#06b6d4"),
    Category("6", "Lazer", "🎮", "#ec4899"),
    Category("7", "Compras", "🛒", "#f59e0b"),
    Category("8", "Contas", "📄", "#64748b"),
    Category("9", "Investimentos", "📈", "#22c55e"),
    Category("10", "Salário", "💰", "#22c55e"),
    Category("11", "Freelance", "💻", "#6366f1"),
    Category("12", "Outros", "📦", "#94a3b8"),
)

# Salário and Freelance are income-only; Outros works both ways
INCOME_ONLY_IDS = {"10", "11"}
INCOME_IDS = {"10", "11", "12"}


def expense_categories() -> List[Category]:
    return [c for c in DEFAULT_CATEGORIES if c.id not in INCOME_ONLY_IDS]


def income_categories() -> List[Category]:
    return [c for c in DEFAULT_CATEGORIES if c.id in INCOME_IDS]


def find_category(category_id: str) -> Optional[Category]:
    return next((c for c in DEFAULT_CATEGORIES if c.id == category_id), None)
