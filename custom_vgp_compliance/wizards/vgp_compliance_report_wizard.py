# -*- coding: utf-8 -*-
# Part of Odoo. See LICENSE file for full copyright and licensing details.

from dateutil.relativedelta import relativedelta

from odoo import api, fields, models


class VgpComplianceReportWizard(models.TransientModel):
    """Display the VGP report figures for a period."""
    _name = 'vgp.compliance.report.wizard'
    _description = 'Rapport de Conformité VGP'

    date_start = fields.Date(
        string='Du',
        required=True,
        default=lambda self: self.env['vgp.date.math'].today() - relativedelta(years=1),
    )
    date_end = fields.Date(
        string='Au',
        required=True,
        default=lambda self: self.env['vgp.date.math'].today(),
    )
    company_id = fields.Many2one(
        'res.company',
        string='Société',
        required=True,
        default=lambda self: self.env.company,
    )

    total = fields.Integer(string='Vérifications Réalisées', compute='_compute_summary')
    passed = fields.Integer(string='Conformes', compute='_compute_summary')
    conditional = fields.Integer(string='Conformes avec Réserves', compute='_compute_summary')
    failed = fields.Integer(string='Non Conformes', compute='_compute_summary')
    without_certificate = fields.Integer(string='Sans Certificat', compute='_compute_summary')
    tracked_equipment = fields.Integer(string='Équipements Vérifiés', compute='_compute_summary')
    compliance_rate_display = fields.Char(string='Taux de Conformité (%)', compute='_compute_summary')
    overdue_count = fields.Integer(string='Équipements en Retard', compute='_compute_summary')
    overdue_summary = fields.Text(string='Détail des Retards', compute='_compute_summary')

    monitored_count = fields.Integer(string='Échéanciers Suivis', compute='_compute_fleet_summary')
    due_soon_count = fields.Integer(string='Échéances Proches', compute='_compute_fleet_summary')
    fleet_compliance_rate_display = fields.Char(string='Parc à Jour (%)', compute='_compute_fleet_summary')

    @api.depends('date_start', 'date_end', 'company_id')
    def _compute_summary(self):
        report = self.env['vgp.compliance.report']
        for wizard in self:
            if not wizard.date_start or not wizard.date_end or wizard.date_start > wizard.date_end:
                wizard.update({
                    'total': 0, 'passed': 0, 'conditional': 0, 'failed': 0,
                    'without_certificate': 0, 'tracked_equipment': 0,
                    'compliance_rate_display': report.format_rate_fr(0.0),
                    'overdue_count': 0, 'overdue_summary': False,
                })
                continue
            summary = report.summarize_compliance(
                wizard.date_start, wizard.date_end, company_id=wizard.company_id.id
            )
            wizard.update({
                'total': summary['total'],
                'passed': summary['passed'],
                'conditional': summary['conditional'],
                'failed': summary['failed'],
                'without_certificate': summary['without_certificate'],
                'tracked_equipment': summary['tracked_equipment'],
                'compliance_rate_display': summary['compliance_rate_display'],
                'overdue_count': summary['overdue_count'],
                'overdue_summary': "\n".join(
                    f"• {row['internal_code']} {row['equipment_name']}: "
                    f"{row['days_overdue']} j (échéance {row['next_due_date'].strftime('%d/%m/%Y')})"
                    for row in summary['overdue_equipment']
                ) or False,
            })

    @api.depends('company_id')
    def _compute_fleet_summary(self):
        classifier = self.env['vgp.compliance.classifier']
        for wizard in self:
            fleet = classifier.get_fleet_summary(company_id=wizard.company_id.id)
            wizard.monitored_count = fleet['monitored']
            wizard.due_soon_count = fleet['due_soon']
            wizard.fleet_compliance_rate_display = fleet['compliance_rate_display']
