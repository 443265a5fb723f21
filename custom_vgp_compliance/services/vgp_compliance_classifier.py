# -*- coding: utf-8 -*-
# Part of Odoo. See LICENSE file for full copyright and licensing details.

"""VGP compliance classifier.

The only place that decides whether an equipment is VGP compliant. Badges,
the rental gate and the compliance report all call classify().

Rules, in order:
1. No non-archived schedule: compliant (monitoring is opt-in).
2. Governing schedule = earliest next_due_date among non-archived ones.
3. Due date passed and schedule not completed: overdue.
4. Most recent inspection failed: non_compliant, even with a future due date.
5. Otherwise compliant.
"""
import logging

from odoo import api, models
from odoo.tools import float_round

_logger = logging.getLogger(__name__)

COMPLIANCE_STATUSES = [
    ('compliant', 'Conforme'),
    ('overdue', 'En retard'),
    ('non_compliant', 'Non conforme'),
]


class VgpComplianceClassifier(models.AbstractModel):
    _name = "vgp.compliance.classifier"
    _description = "Classification de conformité VGP"

    # -------------------------------------------------------------------------
    # LOOKUPS
    # -------------------------------------------------------------------------
    @api.model
    def get_governing_schedule(self, equipment_id):
        """Most urgent non-archived schedule of the equipment (empty if none)."""
        return self.env["vgp.schedule"].sudo().search([
            ("equipment_id", "=", equipment_id),
            ("archived_at", "=", False),
        ], order="next_due_date asc, id asc", limit=1)

    @api.model
    def get_latest_inspection(self, equipment_id):
        return self.env["vgp.inspection"].sudo().search([
            ("equipment_id", "=", equipment_id),
        ], order="inspection_date desc, id desc", limit=1)

    # -------------------------------------------------------------------------
    # CLASSIFICATION
    # -------------------------------------------------------------------------
    @api.model
    def classify(self, equipment_id, today=None):
        """Return 'compliant', 'overdue' or 'non_compliant'.

        Args:
            equipment_id: rental.equipment id or record
            today: date override, defaults to the canonical today
        """
        equipment_id = getattr(equipment_id, "id", equipment_id)
        schedule = self.get_governing_schedule(equipment_id)
        if not schedule:
            return "compliant"

        dates = self.env["vgp.date.math"]
        today = today or dates.today()
        if dates.is_past(schedule.next_due_date, today=today) and schedule.status != "completed":
            return "overdue"

        latest = self.get_latest_inspection(equipment_id)
        if latest and latest.result == "failed":
            return "non_compliant"
        return "compliant"

    @api.model
    def classify_many(self, equipment_ids, today=None):
        """Classify several equipments with a single today.

        Returns:
            dict: {equipment_id: status}
        """
        today = today or self.env["vgp.date.math"].today()
        return {
            getattr(equipment_id, "id", equipment_id): self.classify(equipment_id, today=today)
            for equipment_id in equipment_ids
        }

    @api.model
    def get_overdue_equipment(self, today=None, company_id=None):
        """Equipment currently overdue, whatever the reporting window.

        Returns:
            list of dict, most overdue first
        """
        dates = self.env["vgp.date.math"]
        today = today or dates.today()

        domain = [("archived_at", "=", False), ("next_due_date", "<", today)]
        if company_id:
            domain.append(("company_id", "=", company_id))
        candidates = self.env["vgp.schedule"].sudo().search(domain).mapped("equipment_id")

        overdue = []
        for equipment in candidates:
            if self.classify(equipment.id, today=today) != "overdue":
                continue
            schedule = self.get_governing_schedule(equipment.id)
            overdue.append({
                "equipment_id": equipment.id,
                "equipment_name": equipment.name,
                "internal_code": equipment.internal_code,
                "serial_number": equipment.serial_number or "",
                "category": equipment.category_id.name or "",
                "last_inspection_date": schedule.last_inspection_date or False,
                "next_due_date": schedule.next_due_date,
                "days_overdue": dates.days_between(schedule.next_due_date, today),
            })

        overdue.sort(key=lambda row: (-row["days_overdue"], row["internal_code"] or ""))
        _logger.debug("VGP: %d overdue equipment as of %s", len(overdue), today)
        return overdue

    # -------------------------------------------------------------------------
    # FLEET SUMMARY
    # -------------------------------------------------------------------------
    @api.model
    def _schedule_row(self, schedule, today):
        equipment = schedule.equipment_id
        return {
            "schedule_id": schedule.id,
            "schedule_name": schedule.name,
            "equipment_id": equipment.id,
            "equipment_name": equipment.name,
            "internal_code": equipment.internal_code,
            "category": equipment.category_id.name or "",
            "next_due_date": schedule.next_due_date,
            "days_until_due": self.env["vgp.date.math"].days_between(today, schedule.next_due_date),
        }

    @api.model
    def get_fleet_summary(self, today=None, company_id=None):
        """Dashboard figures over every non-archived schedule.

        Each schedule is counted once under its classify_due_state() value.

        Returns:
            dict: monitored, compliant, due_soon, overdue, compliance_rate,
                  compliance_rate_display, upcoming and overdue_schedules
                  (rows sorted by due date) and overdue_equipment
        """
        today = today or self.env["vgp.date.math"].today()
        domain = [("archived_at", "=", False)]
        if company_id:
            domain.append(("company_id", "=", company_id))
        schedules = self.env["vgp.schedule"].sudo().search(domain, order="next_due_date asc, id asc")

        rows = {"compliant": [], "soon": [], "overdue": []}
        for schedule in schedules:
            rows[schedule.classify_due_state(today=today)].append(self._schedule_row(schedule, today))

        monitored = len(schedules)
        if monitored:
            rate = float_round(
                len(rows["compliant"]) / monitored * 100, precision_digits=1, rounding_method="HALF-UP"
            )
        else:
            rate = 100.0

        summary = {
            "monitored": monitored,
            "compliant": len(rows["compliant"]),
            "due_soon": len(rows["soon"]),
            "overdue": len(rows["overdue"]),
            "compliance_rate": rate,
            "compliance_rate_display": self.env["vgp.compliance.report"].format_rate_fr(rate),
            "upcoming": rows["soon"],
            "overdue_schedules": rows["overdue"],
            "overdue_equipment": self.get_overdue_equipment(today=today, company_id=company_id),
        }
        _logger.info(
            "VGP fleet summary as of %s: %d monitored, %d overdue, %d due soon",
            today, monitored, summary["overdue"], summary["due_soon"],
        )
        return summary
