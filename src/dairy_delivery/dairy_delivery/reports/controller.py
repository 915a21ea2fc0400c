from __future__ import annotations

import csv
import io

from flask import Flask, jsonify, request

from ..common.datetime_utils import today_iso
from ..common.validators import resolve_month
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.report_service

    def _month_args() -> tuple[int, int]:
        return resolve_month(request.args.get("month"), request.args.get("year"))

    def _write_report_csv(*, report, filename: str):
        """Write monthly report rows to a CSV response, one line per customer and product."""

        out = io.StringIO()
        writer = csv.DictWriter(
            out,
            fieldnames=["customer_id", "customer_name", "product", "quantity", "amount", "total_liters", "total_amount"],
        )
        writer.writeheader()
        for item in report:
            products = item.products.items() or [("", None)]
            for product, total in products:
                writer.writerow(
                    {
                        "customer_id": item.customer_id,
                        "customer_name": item.customer_name,
                        "product": product,
                        "quantity": f"{total.quantity:g}" if total else "0",
                        "amount": f"{total.cost:.2f}" if total else "0.00",
                        "total_liters": f"{item.total_liters:g}",
                        "total_amount": f"{item.total_amount:.2f}",
                    }
                )

        csv_bytes = out.getvalue().encode("utf-8-sig")
        return app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/api/stats/dashboard", methods=["GET"], endpoint="stats_dashboard")
    def stats_dashboard():
        return jsonify(service.dashboard().to_dict())

    @app.route("/api/stats/products", methods=["GET"], endpoint="stats_products")
    def stats_products():
        month, year = _month_args()
        return jsonify([s.to_dict() for s in service.product_statistics(month, year)])

    @app.route("/api/stats/team", methods=["GET"], endpoint="stats_team")
    def stats_team():
        day = request.args.get("date") or today_iso()
        return jsonify([s.to_dict() for s in service.team_statistics(day)])

    @app.route("/api/stats/assignments", methods=["GET"], endpoint="stats_assignments")
    def stats_assignments():
        return jsonify(service.assignments())

    @app.route("/api/reports/monthly", methods=["GET"], endpoint="monthly_report")
    def monthly_report():
        month, year = _month_args()
        return jsonify([item.to_dict() for item in service.monthly_report(month, year)])

    @app.route("/api/reports/monthly/export", methods=["GET"], endpoint="monthly_report_export")
    def monthly_report_export():
        month, year = _month_args()
        report = service.monthly_report(month, year)
        return _write_report_csv(report=report, filename=f"bills_{year:04d}_{month + 1:02d}.csv")

    @app.route("/api/reports/revenue", methods=["GET"], endpoint="revenue_report")
    def revenue_report():
        month, year = _month_args()
        return jsonify(service.revenue_breakdown(month, year).to_dict())
