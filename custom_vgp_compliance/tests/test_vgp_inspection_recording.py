# -*- coding: utf-8 -*-
# Part of Odoo. See LICENSE file for full copyright and licensing details.

from datetime import date
from unittest.mock import patch

import psycopg2

from odoo.exceptions import UserError
from odoo.tests import tagged

from odoo.addons.custom_vgp_compliance.exceptions import (
    NotFoundError,
    PersistenceError,
    VgpValidationError,
)

from .common import VgpCommon

INSPECTION_LOGGER = 'odoo.addons.custom_vgp_compliance.models.vgp_inspection'


@tagged('post_install', '-at_install', 'vgp_compliance')
class TestVgpInspectionRecording(VgpCommon):
    """Recording inspections and the resulting schedule transitions."""

    def test_inspection_date_anchors_next_cycle(self):
        schedule = self.create_schedule(interval_months=12, last_inspection_date=date(2024, 1, 15))
        self.assertEqual(schedule.next_due_date, date(2025, 1, 15))

        inspection = self.record(schedule, inspection_date=date(2025, 1, 10))

        self.assertEqual(schedule.next_due_date, date(2026, 1, 10))
        self.assertEqual(schedule.last_inspection_date, date(2025, 1, 10))
        self.assertEqual(schedule.status, 'active')
        self.assertTrue(inspection.name.startswith('INSP-'))
        self.assertEqual(inspection.next_inspection_date, date(2026, 1, 10))
        self.assertEqual(inspection.equipment_id, self.equipment)
        self.assertTrue(inspection.has_certificate)
        self.assertEqual(inspection.performed_by_id, self.env.user)

    def test_conditional_then_failed(self):
        self.set_today(date(2025, 6, 1))
        schedule = self.create_schedule(interval_months=6, last_inspection_date=date(2025, 1, 1))
        self.assertEqual(schedule.next_due_date, date(2025, 7, 1))

        self.set_today(date(2025, 6, 20))
        self.record(schedule, inspection_date=date(2025, 6, 20), result='conditional',
                    findings='Usure des patins de stabilisateur')
        self.assertEqual(schedule.next_due_date, date(2025, 12, 20))
        self.assertEqual(schedule.status, 'active')

        self.set_today(date(2025, 12, 18))
        failed = self.record(schedule, inspection_date=date(2025, 12, 18), result='failed',
                             findings='Fissure sur le bras de levage')
        self.assertEqual(schedule.next_due_date, date(2026, 1, 17))
        self.assertEqual(schedule.status, 'failed')
        self.assertEqual(failed.next_inspection_date, date(2026, 1, 17))
        self.assertEqual(
            self.env['vgp.compliance.classifier'].classify(self.equipment.id), 'non_compliant'
        )
        self.assertEqual(self.equipment.operational_status, 'out_of_service')

    def test_validation_reports_every_missing_field(self):
        schedule = self.create_schedule()
        with self.assertRaises(VgpValidationError) as capture:
            self.env['vgp.inspection'].record_inspection(schedule, {
                'inspection_date': False,
                'inspector_name': '  ',
                'inspector_company': '',
                'result': 'excellent',
            })
        # date, inspector, company missing + unknown result
        self.assertEqual(len(capture.exception.errors), 4)
        self.assertFalse(schedule.inspection_ids)

    def test_future_inspection_date_refused(self):
        schedule = self.create_schedule()
        with self.assertRaises(VgpValidationError):
            self.record(schedule, inspection_date=date(2025, 6, 16))

    def test_invalid_verification_type_refused(self):
        schedule = self.create_schedule()
        with self.assertRaises(VgpValidationError):
            self.record(schedule, verification_type='random')

    def test_archived_or_missing_schedule(self):
        schedule = self.create_schedule()
        schedule.action_archive_schedule()
        with self.assertRaises(NotFoundError):
            self.record(schedule)
        with self.assertRaises(NotFoundError):
            self.record(0)
        with self.assertRaises(NotFoundError):
            schedule.action_record_inspection()

    def test_inspection_is_immutable(self):
        schedule = self.create_schedule()
        inspection = self.record(schedule)
        with self.assertRaises(UserError):
            inspection.write({'result': 'failed'})
        with self.assertRaises(UserError):
            inspection.unlink()

    def test_later_due_date_edit_keeps_snapshot(self):
        schedule = self.create_schedule()
        inspection = self.record(schedule)
        schedule.action_edit_due_date(date(2027, 1, 1), "Prolongation accordée")
        self.assertEqual(inspection.next_inspection_date, date(2026, 6, 15))

    def test_certificate_presence(self):
        schedule = self.create_schedule()
        without = self.record(schedule, certificate_url='  ')
        self.assertFalse(without.has_certificate)

        attachment = self.env['ir.attachment'].create({
            'name': 'certificat.pdf',
            'raw': b'%PDF-1.4',
        })
        with_attachment = self.record(schedule, certificate_url=False, certificate_attachment_id=attachment.id)
        self.assertTrue(with_attachment.has_certificate)

    def test_out_of_service_failure_keeps_inspection(self):
        schedule = self.create_schedule()
        equipment_class = type(self.env['rental.equipment'])
        with patch.object(equipment_class, 'set_operational_status', side_effect=UserError('Service indisponible')):
            with self.assertLogs(INSPECTION_LOGGER, level='ERROR'):
                inspection = self.record(schedule, result='failed')

        self.assertTrue(inspection.exists())
        self.assertEqual(schedule.status, 'failed')
        self.assertEqual(schedule.next_due_date, date(2025, 7, 15))
        self.assertEqual(self.equipment.operational_status, 'available')

    def test_database_error_is_wrapped(self):
        schedule = self.create_schedule()
        schedule_class = type(self.env['vgp.schedule'])
        with patch.object(schedule_class, '_apply_inspection', side_effect=psycopg2.OperationalError('connexion perdue')):
            with self.assertRaises(PersistenceError) as capture, self.assertLogs(INSPECTION_LOGGER, level='ERROR'):
                self.record(schedule)
        self.assertIsInstance(capture.exception.__cause__, psycopg2.OperationalError)
        self.assertFalse(schedule.inspection_ids)
        self.assertEqual(schedule.next_due_date, date(2026, 6, 15))

    def test_record_wizard(self):
        schedule = self.create_schedule()
        action = schedule.action_record_inspection()
        wizard = self.env[action['res_model']].with_context(action['context']).create({
            'inspector_name': 'Claire Martin',
            'inspector_company': 'Apave',
            'result': 'conditional',
            'certification_number': 'APV-77',
        })
        self.assertEqual(wizard.inspection_date, self.today)
        result = wizard.action_record()
        inspection = self.env['vgp.inspection'].browse(result['res_id'])
        self.assertEqual(inspection.inspector_company, 'Apave')
        self.assertEqual(inspection.verification_type, 'periodic')
        self.assertEqual(schedule.next_due_date, date(2025, 12, 15))
