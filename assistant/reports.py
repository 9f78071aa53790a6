"""Plain-language summaries of report data, used when no language model is available."""

from models.inventory import BusinessMetrics, InventoryRecord, SalesRecord

__all__ = ["summarize_report"]


def _money(amount: float) -> str:
    return f"${amount:,.2f}"


def summarize_report(
    report_type: str,
    data: list[InventoryRecord] | list[SalesRecord] | BusinessMetrics,
) -> str:
    """Return a short Spanish summary of the raw report data."""
    if isinstance(data, BusinessMetrics):
        if not data.top_categories:
            return "No hay ventas registradas en el período solicitado."
        top = data.top_categories[0]
        best_region = data.regional_performance[0]
        return (
            f"Ventas totales: {_money(data.total_sales)}. "
            f"Ticket promedio: {_money(data.average_order_value)}. "
            f"Categoría líder: {top.category} ({_money(top.sales)}). "
            f"Mejor región: {best_region.region} ({_money(best_region.sales)})."
        )

    if not data:
        return f"No encontré registros para el reporte de {report_type}."

    if isinstance(data[0], SalesRecord):
        total = sum(sale.amount for sale in data)
        return f"Reporte de ventas: {len(data)} ventas por un total de {_money(total)}."

    units = sum(item.stock for item in data)
    lowest = min(data, key=lambda item: item.stock)
    return (
        f"Reporte de inventario: {len(data)} productos con {units} unidades en stock. "
        f"Menor stock: {lowest.name} ({lowest.stock} unidades)."
    )
