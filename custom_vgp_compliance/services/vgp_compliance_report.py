# -*- coding: utf-8 -*-
# Part of Odoo. See LICENSE file for full copyright and licensing details.

"""VGP compliance report service.

Computes the figures a regulator-facing VGP report must print:
- windowed statistics over inspections (totals, results, rate, missing certificates)
- the overdue equipment list, which answers "what needs attention today"
  and does not depend on the window

Rendering (PDF/CSV) is left to the caller; the numbers it prints must come
from here.
"""
import logging

from odoo import _, api, fields, models
from odoo.tools import float_round

from ..exceptions import VgpValidationError
from ..models.vgp_inspection import INSPECTION_RESULTS

_logger = logging.getLogger(__name__)

REPORT_RESULT_CODES = {
    'passed': 'CONFORME',
    'conditional': 'CONDITIONNEL',
    'failed': 'NON_CONFORME',
}

EMPTY_FINDINGS = 'RAS'


class VgpComplianceReport(models.AbstractModel):
    _name = "vgp.compliance.report"
    _description = "Rapport de conformité VGP"

    # -------------------------------------------------------------------------
    # INPUT NORMALISATION
    # -------------------------------------------------------------------------
    @api.model
    def _inspection_values(self, inspection):
        """Read an inspection record or dict into a plain dict."""
        if isinstance(inspection, models.BaseModel):
            return {
                "inspection_date": inspection.inspection_date,
                "result": inspection.result,
                "certificate_url": inspection.certificate_url,
                "has_certificate": inspection.has_certificate,
                "equipment_id": inspection.equipment_id.id,
            }
        values = dict(inspection)
        values["inspection_date"] = fields.Date.to_date(values.get("inspection_date"))
        equipment = values.get("equipment_id") or values.get("asset_id")
        values["equipment_id"] = getattr(equipment, "id", equipment)
        values.setdefault(
            "has_certificate",
            bool((values.get("certificate_url") or "").strip()),
        )
        return values

    # -------------------------------------------------------------------------
    # FORMATTING
    # -------------------------------------------------------------------------
    @api.model
    def format_rate_fr(self, rate):
        """Format a percentage with one decimal and a comma: 50.0 -> '50,0'."""
        rounded = float_round(rate or 0.0, precision_digits=1, rounding_method="HALF-UP")
        return f"{rounded:.1f}".replace(".", ",")

    # -------------------------------------------------------------------------
    # STATISTICS
    # -------------------------------------------------------------------------
    @api.model
    def summarize(self, inspections, date_start, date_end):
        """Summary statistics of inspections dated within [date_start, date_end].

        Args:
            inspections: vgp.inspection recordset or iterable of dicts
                         (inspection_date, result, certificate_url[, equipment_id])
            date_start: first day of the window, inclusive
            date_end: last day of the window, inclusive

        Returns:
            dict: total, passed, conditional, failed, without_certificate,
                  compliance_rate, compliance_rate_display, tracked_equipment

        Raises:
            VgpValidationError: missing or inverted window, or in-window rows
                                with an unknown result
        """
        date_start = fields.Date.to_date(date_start)
        date_end = fields.Date.to_date(date_end)
        if not date_start or not date_end:
            raise VgpValidationError(_("Les dates de début et de fin de période sont obligatoires."))
        if date_start > date_end:
            raise VgpValidationError(_("La date de début doit précéder la date de fin."))

        counts = {result: 0 for result in dict(INSPECTION_RESULTS)}
        total = 0
        without_certificate = 0
        equipment_ids = set()
        errors = []

        for inspection in inspections:
            values = self._inspection_values(inspection)
            inspection_date = values["inspection_date"]
            if not inspection_date or not (date_start <= inspection_date <= date_end):
                continue
            if values.get("result") not in counts:
                errors.append(_(
                    "Résultat invalide pour la vérification du %(date)s: %(result)s",
                    date=inspection_date.strftime("%d/%m/%Y"),
                    result=values.get("result"),
                ))
                continue
            total += 1
            counts[values["result"]] += 1
            if not values["has_certificate"]:
                without_certificate += 1
            if values.get("equipment_id"):
                equipment_ids.add(values["equipment_id"])

        if errors:
            raise VgpValidationError(errors)

        if total:
            compliance_rate = float_round(
                counts["passed"] / total * 100, precision_digits=1, rounding_method="HALF-UP"
            )
        else:
            compliance_rate = 0.0

        return {
            "date_start": date_start,
            "date_end": date_end,
            "total": total,
            "passed": counts["passed"],
            "conditional": counts["conditional"],
            "failed": counts["failed"],
            "without_certificate": without_certificate,
            "compliance_rate": compliance_rate,
            "compliance_rate_display": self.format_rate_fr(compliance_rate),
            "tracked_equipment": len(equipment_ids),
        }

    @api.model
    def summarize_compliance(self, date_start, date_end, company_id=None, today=None):
        """Report figures for the company's inspections in the window.

        Adds the overdue equipment list (as of today, independent of the window).
        """
        date_start = fields.Date.to_date(date_start)
        date_end = fields.Date.to_date(date_end)
        company_id = company_id or self.env.company.id

        domain = [("company_id", "=", company_id)]
        if date_start:
            domain.append(("inspection_date", ">=", date_start))
        if date_end:
            domain.append(("inspection_date", "<=", date_end))
        inspections = self.env["vgp.inspection"].search(domain)

        summary = self.summarize(inspections, date_start, date_end)
        overdue = self.env["vgp.compliance.classifier"].get_overdue_equipment(
            today=today, company_id=company_id
        )
        summary.update({
            "overdue_equipment": overdue,
            "overdue_count": len(overdue),
        })
        _logger.info(
            "VGP report %s..%s: %d inspections, rate %s%%, %d overdue",
            date_start, date_end, summary["total"], summary["compliance_rate_display"], len(overdue),
        )
        return summary

    # -------------------------------------------------------------------------
    # REPORT LINES
    # -------------------------------------------------------------------------
    @api.model
    def get_report_lines(self, inspections):
        """Rows for the report renderer, most recent first."""
        type_labels = dict(self.env["vgp.inspection"]._fields["verification_type"].selection)
        lines = []
        for inspection in inspections.sorted(lambda i: (i.inspection_date, i.id), reverse=True):
            equipment = inspection.equipment_id
            lines.append({
                "date": inspection.inspection_date.strftime("%d/%m/%Y"),
                "equipment_code": equipment.internal_code or "",
                "equipment_name": equipment.name,
                "serial_number": equipment.serial_number or "",
                "regulatory_category": equipment.category_id.regulatory_category or "",
                "verification_type": type_labels.get(inspection.verification_type, ""),
                "inspector_name": inspection.inspector_name,
                "inspector_company": inspection.inspector_company,
                "inspector_accreditation": inspection.inspector_accreditation or "",
                "result": REPORT_RESULT_CODES[inspection.result],
                "findings": (inspection.findings or "").strip() or EMPTY_FINDINGS,
                "next_inspection_date": inspection.next_inspection_date.strftime("%d/%m/%Y"),
                "certification_number": inspection.certification_number or "",
                "certificate_url": inspection.certificate_url or "",
            })
        return lines
