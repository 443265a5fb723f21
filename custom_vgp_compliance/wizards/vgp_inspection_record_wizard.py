# -*- coding: utf-8 -*-
# Part of Odoo. See LICENSE file for full copyright and licensing details.

from odoo import _, fields, models

from ..models.vgp_inspection import INSPECTION_RESULTS, VERIFICATION_TYPES


class VgpInspectionRecordWizard(models.TransientModel):
    """Form used to enter a completed VGP inspection."""
    _name = 'vgp.inspection.record.wizard'
    _description = 'Saisie Vérification VGP'

    schedule_id = fields.Many2one(
        'vgp.schedule',
        string='Échéancier',
        required=True,
        readonly=True,
    )
    equipment_id = fields.Many2one(
        related='schedule_id.equipment_id',
        string='Équipement',
        readonly=True,
    )
    inspection_date = fields.Date(
        string='Date de Vérification',
        default=lambda self: self.env['vgp.date.math'].today(),
    )
    verification_type = fields.Selection(
        VERIFICATION_TYPES,
        string='Type de Vérification',
        default='periodic',
    )
    inspector_name = fields.Char(string='Inspecteur')
    inspector_company = fields.Char(string='Organisme')
    inspector_accreditation = fields.Char(string="N° d'Accréditation")
    certification_number = fields.Char(string='N° de Certificat')
    result = fields.Selection(INSPECTION_RESULTS, string='Résultat')
    findings = fields.Text(string='Observations')
    certificate_url = fields.Char(string='Lien Certificat')
    certificate_attachment_id = fields.Many2one('ir.attachment', string='Certificat')

    def action_record(self):
        """Record the inspection; validation errors list every missing field."""
        self.ensure_one()
        inspection = self.env['vgp.inspection'].record_inspection(self.schedule_id, {
            'inspection_date': self.inspection_date,
            'verification_type': self.verification_type,
            'inspector_name': self.inspector_name,
            'inspector_company': self.inspector_company,
            'inspector_accreditation': self.inspector_accreditation,
            'certification_number': self.certification_number,
            'result': self.result,
            'findings': self.findings,
            'certificate_url': self.certificate_url,
            'certificate_attachment_id': self.certificate_attachment_id.id,
        })
        return {
            'name': _('Vérification VGP'),
            'type': 'ir.actions.act_window',
            'res_model': 'vgp.inspection',
            'res_id': inspection.id,
            'view_mode': 'form',
            'target': 'current',
        }
