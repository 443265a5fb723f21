# -*- coding: utf-8 -*-
# Part of Odoo. See LICENSE file for full copyright and licensing details.

from odoo import fields, models


class VgpScheduleDueDateWizard(models.TransientModel):
    """Wizard to change a VGP due date with a mandatory reason"""
    _name = 'vgp.schedule.due.date.wizard'
    _description = "Modification d'Échéance VGP"

    schedule_id = fields.Many2one(
        'vgp.schedule',
        string='Échéancier',
        required=True,
        readonly=True,
    )
    current_date = fields.Date(
        related='schedule_id.next_due_date',
        string='Échéance Actuelle',
        readonly=True,
    )
    new_date = fields.Date(
        string='Nouvelle Échéance',
        required=True,
    )
    reason = fields.Text(
        string='Motif',
        required=True,
        help="Justification conservée dans l'historique (ex: prolongation accordée par l'organisme)."
    )

    def action_confirm(self):
        self.ensure_one()
        self.schedule_id.action_edit_due_date(self.new_date, self.reason)
        return {'type': 'ir.actions.act_window_close'}
