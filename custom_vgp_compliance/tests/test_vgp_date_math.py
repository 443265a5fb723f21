# -*- coding: utf-8 -*-
# Part of Odoo. See LICENSE file for full copyright and licensing details.

from datetime import date, datetime

from odoo.tests import TransactionCase, tagged


@tagged('post_install', '-at_install', 'vgp_compliance')
class TestVgpDateMath(TransactionCase):

    @classmethod
    def setUpClass(cls):
        super().setUpClass()
        cls.dates = cls.env['vgp.date.math']
        cls.ICP = cls.env['ir.config_parameter'].sudo()

    def test_add_months_clamps_to_month_end(self):
        self.assertEqual(self.dates.add_months(date(2025, 1, 31), 1), date(2025, 2, 28))
        self.assertEqual(self.dates.add_months(date(2024, 1, 31), 1), date(2024, 2, 29))
        self.assertEqual(self.dates.add_months(date(2024, 1, 15), 12), date(2025, 1, 15))
        self.assertEqual(self.dates.add_months('2025-08-31', 6), date(2026, 2, 28))

    def test_add_days_and_days_between(self):
        self.assertEqual(self.dates.add_days(date(2025, 12, 18), 30), date(2026, 1, 17))
        self.assertEqual(self.dates.days_between(date(2025, 6, 1), date(2025, 6, 15)), 14)
        self.assertEqual(self.dates.days_between(date(2025, 6, 15), date(2025, 6, 1)), -14)

    def test_today_uses_canonical_timezone(self):
        # 22:30 UTC on June 30 is already July 1 in Paris (UTC+2 in summer)
        now = datetime(2025, 6, 30, 22, 30)
        self.ICP.set_param('custom_vgp_compliance.timezone', 'Europe/Paris')
        self.assertEqual(self.dates.today(now=now), date(2025, 7, 1))

        self.ICP.set_param('custom_vgp_compliance.timezone', 'UTC')
        self.assertEqual(self.dates.today(now=now), date(2025, 6, 30))

    def test_unknown_timezone_falls_back_to_utc(self):
        self.ICP.set_param('custom_vgp_compliance.timezone', 'Mars/Olympus_Mons')
        with self.assertLogs('odoo.addons.custom_vgp_compliance.services.vgp_date_math', level='WARNING'):
            self.assertEqual(self.dates.get_timezone(), 'UTC')

    def test_is_past(self):
        today = date(2025, 6, 15)
        self.assertTrue(self.dates.is_past(date(2025, 6, 14), today=today))
        self.assertFalse(self.dates.is_past(date(2025, 6, 15), today=today))
        self.assertFalse(self.dates.is_past(False, today=today))
