# -*- coding: utf-8 -*-
# Part of Odoo. See LICENSE file for full copyright and licensing details.

"""VGP date arithmetic service.

Every "today" used by the VGP rules comes from this service, in one
canonical time zone (``custom_vgp_compliance.timezone``, Europe/Paris by
default). Mixing the user's zone with UTC makes schedules flip between
compliant and overdue around midnight.

Usage:
    dates = self.env["vgp.date.math"]
    due = dates.add_months(fields.Date.to_date("2025-01-31"), 1)  # 2025-02-28
    late = dates.is_past(due)
"""
import logging
from datetime import timedelta

import pytz
from dateutil.relativedelta import relativedelta

from odoo import api, fields, models

_logger = logging.getLogger(__name__)

DEFAULT_TIMEZONE = 'Europe/Paris'


class VgpDateMath(models.AbstractModel):
    _name = "vgp.date.math"
    _description = "Calculs de dates VGP"

    # -------------------------------------------------------------------------
    # ARITHMETIC
    # -------------------------------------------------------------------------
    @api.model
    def add_months(self, value, months):
        """Add calendar months; a missing day is clamped to the month's end."""
        return fields.Date.to_date(value) + relativedelta(months=months)

    @api.model
    def add_days(self, value, days):
        return fields.Date.to_date(value) + timedelta(days=days)

    @api.model
    def days_between(self, start, end):
        """Signed number of days from ``start`` to ``end``."""
        return (fields.Date.to_date(end) - fields.Date.to_date(start)).days

    # -------------------------------------------------------------------------
    # CANONICAL TODAY
    # -------------------------------------------------------------------------
    @api.model
    def get_timezone(self):
        """Return the configured canonical zone name, UTC if it is unknown."""
        ICP = self.env["ir.config_parameter"].sudo()
        tz_name = ICP.get_param("custom_vgp_compliance.timezone", DEFAULT_TIMEZONE) or DEFAULT_TIMEZONE
        if tz_name not in pytz.all_timezones_set:
            _logger.warning("VGP: unknown timezone %r, falling back to UTC", tz_name)
            return 'UTC'
        return tz_name

    @api.model
    def today(self, now=None):
        """Today's date in the canonical zone.

        Args:
            now: naive UTC datetime (Odoo storage convention); defaults to now

        Returns:
            datetime.date
        """
        now = now or fields.Datetime.now()
        tz = pytz.timezone(self.get_timezone())
        return pytz.utc.localize(now).astimezone(tz).date()

    @api.model
    def is_past(self, value, today=None):
        if not value:
            return False
        today = today or self.today()
        return fields.Date.to_date(value) < today
