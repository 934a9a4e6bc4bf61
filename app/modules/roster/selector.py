# app/modules/roster/selector.py
"""
Selector de prioridad.

Decide qué vendedor recibe el próximo cliente: entre los vendedores sin
cliente en curso, el primero (en orden de inserción) con el mínimo de
ventas. Los vendedores ocupados no cuentan para el mínimo.

Funciones puras: no modifican la lista recibida ni consultan la base.
"""
from typing import Any, List, Optional, Sequence


def _is_available(seller: Any) -> bool:
    return not seller.has_customer


def select_next_seller(sellers: Sequence[Any]) -> Optional[Any]:
    """
    Devuelve el próximo vendedor o None si el roster está vacío o todos
    están ocupados. `sellers` debe venir en orden de inserción.
    """
    available = [s for s in sellers if _is_available(s)]
    if not available:
        return None
    
    min_sales = min(s.sale_count for s in available)
    for seller in available:
        if seller.sale_count == min_sales:
            return seller
    return None


def rotation_queue(sellers: Sequence[Any]) -> List[Any]:
    """
    Orden de la fila para mostrar: disponibles con el mínimo de ventas,
    luego el resto de disponibles, luego los ocupados. Cada grupo conserva
    el orden de inserción.
    """
    available = [s for s in sellers if _is_available(s)]
    busy = [s for s in sellers if not _is_available(s)]
    if not available:
        return busy
    
    min_sales = min(s.sale_count for s in available)
    priority = [s for s in available if s.sale_count == min_sales]
    others = [s for s in available if s.sale_count != min_sales]
    return priority + others + busy
