# -*- coding: utf-8 -*-
# Part of Odoo. See LICENSE file for full copyright and licensing details.

"""Rental gate: VGP precondition checked at the moment of checkout."""

import logging

from odoo import _, api, models

from ..exceptions import ComplianceBlockedError

_logger = logging.getLogger(__name__)


class VgpRentalGate(models.AbstractModel):
    _name = "vgp.rental.gate"
    _description = "Blocage des locations VGP"

    @api.model
    def _get_blocking_reason(self, equipment, status):
        if status == "overdue":
            schedule = self.env["vgp.compliance.classifier"].get_governing_schedule(equipment.id)
            return _(
                "La VGP de %(equipment)s est en retard (échéance du %(date)s).",
                equipment=equipment.display_name,
                date=schedule.next_due_date.strftime("%d/%m/%Y"),
            )
        if status == "non_compliant":
            latest = self.env["vgp.compliance.classifier"].get_latest_inspection(equipment.id)
            return _(
                "La dernière VGP de %(equipment)s (%(date)s) est non conforme: utilisation interdite.",
                equipment=equipment.display_name,
                date=latest.inspection_date.strftime("%d/%m/%Y"),
            )
        return False

    @api.model
    def check_rental_allowed(self, equipment_id, today=None):
        """Evaluate the gate now; never cached.

        Returns:
            dict: {'allowed': bool, 'status': str, 'reason': str or False}
        """
        equipment = self.env["rental.equipment"].browse(getattr(equipment_id, "id", equipment_id))
        status = self.env["vgp.compliance.classifier"].classify(equipment.id, today=today)
        allowed = status == "compliant"
        return {
            "allowed": allowed,
            "status": status,
            "reason": False if allowed else self._get_blocking_reason(equipment, status),
        }

    @api.model
    def ensure_rental_allowed(self, equipment_id, today=None):
        """Raise ComplianceBlockedError if the equipment cannot be rented."""
        check = self.check_rental_allowed(equipment_id, today=today)
        if not check["allowed"]:
            equipment_id = getattr(equipment_id, "id", equipment_id)
            _logger.info("VGP: rental of equipment %s blocked (%s)", equipment_id, check["status"])
            raise ComplianceBlockedError(
                _("Location impossible.\n\n%s", check["reason"]),
                status=check["status"],
                equipment_id=equipment_id,
            )
        return True
