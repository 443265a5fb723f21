# -*- coding: utf-8 -*-
# Part of Odoo. See LICENSE file for full copyright and licensing details.

from odoo.exceptions import UserError, ValidationError
from odoo.tests import TransactionCase, tagged


@tagged('post_install', '-at_install', 'rental_equipment', 'rental_checkout')
class TestRentalCheckout(TransactionCase):
    """Checkout / return workflow and its effect on the equipment status."""

    @classmethod
    def setUpClass(cls):
        super().setUpClass()
        cls.equipment = cls.env['rental.equipment'].create({
            'name': 'Mini-pelle 2.5T',
            'serial_number': 'MP-0042',
        })

    def _create_checkout(self, **vals):
        return self.env['rental.checkout'].create(dict({
            'equipment_id': self.equipment.id,
            'client_name': 'BTP Martin',
        }, **vals))

    def test_checkout_and_return(self):
        checkout = self._create_checkout()
        self.assertTrue(checkout.name.startswith('LOC-'))
        self.assertEqual(checkout.state, 'draft')

        checkout.action_checkout()
        self.assertEqual(checkout.state, 'ongoing')
        self.assertTrue(checkout.checkout_date)
        self.assertEqual(self.equipment.operational_status, 'in_use')
        self.assertEqual(self.equipment.current_checkout_id, checkout)

        checkout.action_return()
        self.assertEqual(checkout.state, 'returned')
        self.assertTrue(checkout.return_date)
        self.assertEqual(self.equipment.operational_status, 'available')

    def test_checkout_requires_available_equipment(self):
        self.equipment.set_operational_status('maintenance')
        checkout = self._create_checkout()
        with self.assertRaises(UserError):
            checkout.action_checkout()
        self.assertEqual(checkout.state, 'draft')

    def test_no_double_rental(self):
        self._create_checkout().action_checkout()
        second = self._create_checkout(client_name='Levage Dupont')
        with self.assertRaises(UserError):
            second.action_checkout()

    def test_return_keeps_out_of_service(self):
        checkout = self._create_checkout()
        checkout.action_checkout()
        self.equipment.set_operational_status('out_of_service', reason='Panne')
        checkout.action_return()
        self.assertEqual(self.equipment.operational_status, 'out_of_service')

    def test_cancel_only_draft(self):
        checkout = self._create_checkout()
        checkout.action_cancel()
        self.assertEqual(checkout.state, 'cancelled')

        ongoing = self._create_checkout()
        ongoing.action_checkout()
        with self.assertRaises(UserError):
            ongoing.action_cancel()

    def test_client_name_required(self):
        with self.assertRaises(ValidationError):
            self._create_checkout(client_name='   ')
