# -*- coding: utf-8 -*-
# Part of Odoo. See LICENSE file for full copyright and licensing details.

from datetime import date

from odoo.tests import tagged

from odoo.addons.custom_vgp_compliance.exceptions import ComplianceBlockedError

from .common import VgpCommon


@tagged('post_install', '-at_install', 'vgp_compliance')
class TestVgpRentalGate(VgpCommon):
    """Checkout is refused while the VGP is overdue or the last one failed."""

    @classmethod
    def setUpClass(cls):
        super().setUpClass()
        cls.gate = cls.env['vgp.rental.gate']

    def _create_checkout(self, equipment=None):
        return self.env['rental.checkout'].create({
            'equipment_id': (equipment or self.equipment).id,
            'client_name': 'Levage Services SARL',
        })

    def test_compliant_equipment_can_be_rented(self):
        self.create_schedule(interval_months=12, last_inspection_date=date(2025, 1, 10))
        self.assertEqual(
            self.gate.check_rental_allowed(self.equipment.id),
            {'allowed': True, 'status': 'compliant', 'reason': False},
        )
        checkout = self._create_checkout()
        checkout.action_checkout()
        self.assertEqual(checkout.state, 'ongoing')

    def test_overdue_equipment_blocked(self):
        self.create_schedule(interval_months=12, last_inspection_date=date(2024, 5, 31))
        check = self.gate.check_rental_allowed(self.equipment.id)
        self.assertFalse(check['allowed'])
        self.assertEqual(check['status'], 'overdue')
        self.assertIn('31/05/2025', check['reason'])

        checkout = self._create_checkout()
        with self.assertRaises(ComplianceBlockedError) as capture:
            checkout.action_checkout()
        self.assertEqual(capture.exception.status, 'overdue')
        self.assertEqual(capture.exception.equipment_id, self.equipment.id)
        self.assertEqual(checkout.state, 'draft')
        self.assertEqual(self.equipment.operational_status, 'available')

    def test_failed_inspection_blocks_even_if_back_in_service(self):
        schedule = self.create_schedule(interval_months=12)
        self.record(schedule, result='failed')
        # repaired and manually put back in service, but no passing VGP yet
        self.equipment.set_operational_status('available')

        check = self.gate.check_rental_allowed(self.equipment.id)
        self.assertEqual(check['status'], 'non_compliant')
        self.assertIn('15/06/2025', check['reason'])
        with self.assertRaises(ComplianceBlockedError):
            self._create_checkout().action_checkout()

    def test_gate_is_evaluated_at_checkout_time(self):
        self.create_schedule(interval_months=12, last_inspection_date=date(2024, 7, 1))
        checkout = self._create_checkout()

        self.set_today(date(2025, 7, 2))
        with self.assertRaises(ComplianceBlockedError):
            checkout.action_checkout()

        self.set_today(date(2025, 6, 30))
        checkout.action_checkout()
        self.assertEqual(checkout.state, 'ongoing')

    def test_unmonitored_equipment_not_blocked(self):
        self.assertTrue(self.gate.ensure_rental_allowed(self.equipment.id))
        self.assertFalse(self.equipment.vgp_rental_blocked)
