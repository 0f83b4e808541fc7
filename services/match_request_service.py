"""
Matching request builder.

Serializes the shortlist and the requested items into the prompt sent to the
Claude matcher. The matching rules are static prose: the matcher reads
natural language, so vocabulary hints live here as directives rather than
as key/value pairs.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Sequence

import structlog

from models.catalog import ScoredProduct
from models.quote import RequestedItem

logger = structlog.get_logger(__name__)

OUT_OF_STOCK_SENTINEL = "SIN STOCK"

MATCHING_RULES = """REGLAS DE MATCHEO:
1. STOCK: si hay varios productos equivalentes, elegí SIEMPRE uno con stock. Los productos marcados "stock:SIN STOCK" sólo se eligen si no existe ninguna alternativa con stock.
2. CONCEPTO, NO TEXTO: matcheá por lo que el ítem ES, no por coincidencia literal de palabras. Ejemplos:
   - "birome", "lapicera", "boligrafo" → bolígrafo (NO lapicera pluma, salvo que diga "pluma")
   - "plasticola" → adhesivo vinílico; "voligoma" → adhesivo sintético; "barra adhesiva", "lapiz adhesivo" → adhesivo en barra (NO es un lápiz)
   - "fibras", "fibritas" → marcadores escolares finos; "fibrón" → marcador permanente grueso
   - "goma" sola → goma de borrar; "goma eva" → goma eva (NO goma de borrar)
   - "cinta scotch" → cinta adhesiva transparente; "cinta de papel" → cinta de papel (NO la transparente)
   - "papel glasé" → papel glacé; "hojas canson" → block de dibujo Canson
   - "repuesto", "hojas rayadas", "hojas N°3" → repuesto de hojas N°3 (rayado salvo que diga cuadriculado)
   - "carpeta N°3" → carpeta de tres anillos N°3
   - "canopla" → cartuchera; "afilador" → sacapuntas; "crayolas" → crayones
   - "papel afiche", "cartulina", "papel crepé", "papel madera" → el producto por pliego/metro aunque se venda sólo en el local
3. RUIDO: ignorá prefijos de cantidad o empaque ("paquete de", "caja de", "set de", "x2", "2 unidades") al buscar el producto; sirven sólo para la cantidad.
4. CANTIDAD: respetá la cantidad pedida en "quantity". No la cambies por el contenido del empaque.
5. PRECIO: unitPrice es el precio del catálogo; subtotal = unitPrice × quantity.
6. SIN MATCH: usá matched:false sólo si de verdad no hay nada razonable en el catálogo. En ese caso catalogId, catalogSku, catalogName y catalogSlug van en null, unitPrice:0 y subtotal:0.
7. CONFIANZA: "high" si es el mismo producto, "medium" si es un equivalente razonable, "low" si es una aproximación."""

RESPONSE_FORMAT = """Devolvé SOLO un array JSON válido, un objeto por ítem de la lista y en el mismo orden, con este formato exacto:
[{"requestedItem":"nombre solicitado","quantity":1,"matched":true,"catalogId":1,"catalogSku":"SKU","catalogName":"nombre producto","unitPrice":1000,"subtotal":1000,"confidence":"high"}]
Respondé ÚNICAMENTE con el JSON, empezando con [ y terminando con ]."""


@dataclass(frozen=True)
class MatchRequest:
    """Serialized matching request."""
    catalog_text: str
    items_text: str
    prompt: str
    products_included: int
    products_dropped: int


def format_price(price: Decimal) -> str:
    """Catalog prices without trailing zeros: 1500.00 → 1500, 99.50 → 99.5."""
    normalized = Decimal(price).normalize()
    # normalize() turns 1500 into 1.5E+3
    return format(normalized, "f")


def format_catalog_line(scored: ScoredProduct) -> str:
    """ID:12 | SKU:BIC-AZ | "Bolígrafo Bic Cristal Azul" | $450 | stock:30"""
    product = scored.product
    stock = str(product.stock) if product.stock > 0 else OUT_OF_STOCK_SENTINEL
    return (
        f'ID:{product.id} | SKU:{product.sku or "-"} | "{product.name}" | '
        f"${format_price(product.price)} | stock:{stock}"
    )


def format_item_line(index: int, item: RequestedItem) -> str:
    """0. "birome azul" x2 (nota: trazo fino)"""
    line = f'{index}. "{item.item}" x{item.quantity}'
    if item.notes:
        line += f" (nota: {item.notes})"
    return line


class MatchRequestBuilder:
    """
    Build the matching prompt within a character budget.

    The shortlist arrives best-first, so when the catalog block does not fit
    the lowest-scored lines are dropped.
    """

    def __init__(self, max_catalog_chars: int = 60000):
        self.max_catalog_chars = max_catalog_chars

    def build_catalog_text(self, shortlist: Sequence[ScoredProduct]) -> tuple[str, int]:
        """
        Catalog block and number of products that fit.

        Returns:
            Tuple of (catalog text, products included)
        """
        lines: list[str] = []
        used = 0
        for scored in shortlist:
            line = format_catalog_line(scored)
            cost = len(line) + 1
            if used + cost > self.max_catalog_chars:
                break
            lines.append(line)
            used += cost
        return "\n".join(lines), len(lines)

    def build_items_text(self, items: Sequence[RequestedItem]) -> str:
        return "\n".join(format_item_line(i, item) for i, item in enumerate(items))

    def build(
        self,
        shortlist: Sequence[ScoredProduct],
        items: Sequence[RequestedItem]
    ) -> MatchRequest:
        """
        Build the full matching request.

        Args:
            shortlist: Pre-filtered products, best first
            items: Requested list items

        Returns:
            MatchRequest with the prompt ready to send
        """
        catalog_text, included = self.build_catalog_text(shortlist)
        items_text = self.build_items_text(items)

        prompt = (
            "Tenés este catálogo de productos de una librería "
            "(ID | SKU | nombre | precio | stock):\n"
            f"{catalog_text}\n\n"
            "Y esta lista de útiles escolares solicitados "
            "(índice. \"ítem\" xcantidad):\n"
            f"{items_text}\n\n"
            "Para cada ítem de la lista, encontrá el producto más adecuado del catálogo.\n\n"
            f"{MATCHING_RULES}\n\n"
            f"{RESPONSE_FORMAT}"
        )

        dropped = len(shortlist) - included
        if dropped:
            logger.warning(
                "match_request_catalog_truncated",
                included=included,
                dropped=dropped,
                max_chars=self.max_catalog_chars
            )

        return MatchRequest(
            catalog_text=catalog_text,
            items_text=items_text,
            prompt=prompt,
            products_included=included,
            products_dropped=dropped
        )
