# -*- coding: utf-8 -*-
# Part of Odoo. See LICENSE file for full copyright and licensing details.

from datetime import date
from unittest.mock import patch

from odoo.tests import TransactionCase


class VgpCommon(TransactionCase):
    """Lifting category, one platform and a frozen canonical today (2025-06-15)."""

    @classmethod
    def setUpClass(cls):
        super().setUpClass()
        cls.category = cls.env['rental.equipment.category'].create({
            'name': 'Nacelles Élévatrices',
            'code': 'VGP-NAC',
            'is_vgp_regulated': True,
            'regulatory_category': 'aerial_platform',
            'default_vgp_interval_months': 6,
        })
        cls.equipment = cls.env['rental.equipment'].create({
            'name': 'Nacelle articulée 16m',
            'serial_number': 'NA16-001',
            'category_id': cls.category.id,
        })

    def setUp(self):
        super().setUp()
        self.today = date(2025, 6, 15)
        self.mock_today = self.startPatcher(
            patch.object(type(self.env['vgp.date.math']), 'today', return_value=self.today)
        )

    def set_today(self, value):
        self.today = value
        self.mock_today.return_value = value

    def create_equipment(self, name, **vals):
        return self.env['rental.equipment'].create(dict({
            'name': name,
            'category_id': self.category.id,
        }, **vals))

    def create_schedule(self, equipment=None, interval_months=12, last_inspection_date=None, **kwargs):
        return self.env['vgp.schedule'].create_schedule(
            (equipment or self.equipment).id,
            interval_months=interval_months,
            last_inspection_date=last_inspection_date,
            created_by=kwargs.pop('created_by', 'Responsable Parc'),
            **kwargs
        )

    def inspection_data(self, **overrides):
        data = {
            'inspection_date': self.today,
            'inspector_name': 'Jean Dupont',
            'inspector_company': 'Bureau Veritas',
            'inspector_accreditation': 'COFRAC 3-1234',
            'certification_number': 'BV-2025-0001',
            'result': 'passed',
            'certificate_url': 'https://docs.example.com/vgp/BV-2025-0001.pdf',
        }
        data.update(overrides)
        return data

    def record(self, schedule, **overrides):
        return self.env['vgp.inspection'].record_inspection(schedule, self.inspection_data(**overrides))
