# -*- coding: utf-8 -*-
# Part of Odoo. See LICENSE file for full copyright and licensing details.

"""
Error taxonomy for VGP compliance.

All classes derive from odoo.exceptions so the web client shows them as
user dialogs and RPC callers receive the usual error payload.
"""

from odoo.exceptions import MissingError, UserError, ValidationError


class VgpValidationError(ValidationError):
    """Invalid or missing input. Carries every violation found, not only the first."""

    def __init__(self, errors):
        if isinstance(errors, str):
            errors = [errors]
        self.errors = list(errors)
        super().__init__("\n".join(f"• {error}" for error in self.errors))


class NotFoundError(MissingError):
    """Referenced schedule or equipment does not exist or is archived."""


class ComplianceBlockedError(UserError):
    """Rental refused because the equipment is not VGP compliant."""

    def __init__(self, message, status, equipment_id=None):
        self.status = status
        self.equipment_id = equipment_id
        super().__init__(message)


class PersistenceError(UserError):
    """Storage failure while recording. Never retried here."""
