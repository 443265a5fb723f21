# -*- coding: utf-8 -*-
# Part of Odoo. See LICENSE file for full copyright and licensing details.

"""
Extension of rental.equipment and its category for VGP monitoring.

Fields added:
- vgp_schedule_ids / vgp_inspection_ids: monitoring history
- vgp_compliance_status: badge, computed on read by vgp.compliance.classifier
- vgp_rental_blocked: whether the rental gate would refuse a checkout now
- vgp_next_due_date: due date of the governing schedule

Nothing here is stored: schedules change independently of the equipment,
so the status is always derived on demand.
"""

from odoo import _, api, fields, models

from ..services.vgp_compliance_classifier import COMPLIANCE_STATUSES

REGULATORY_CATEGORIES = [
    ('earthmoving', 'Engins de chantier'),
    ('lifting', 'Équipements de levage'),
    ('scaffolding', 'Échafaudages'),
    ('aerial_platform', 'Nacelles et plateformes élévatrices'),
    ('personnel_lifting', 'Appareils de levage de personnes'),
    ('industrial_truck', 'Chariots automoteurs de manutention'),
]


class RentalEquipmentCategory(models.Model):
    _inherit = 'rental.equipment.category'

    is_vgp_regulated = fields.Boolean(
        string='Soumis à VGP',
        help="Les équipements de cette catégorie relèvent des vérifications générales périodiques."
    )

    regulatory_category = fields.Selection(
        REGULATORY_CATEGORIES,
        string='Catégorie Réglementaire',
    )

    default_vgp_interval_months = fields.Integer(
        string='Périodicité VGP par défaut (mois)',
        default=12,
    )


class RentalEquipment(models.Model):
    """Extend equipment with VGP compliance helper fields."""

    _inherit = 'rental.equipment'

    vgp_schedule_ids = fields.One2many(
        'vgp.schedule',
        'equipment_id',
        string='Échéanciers VGP',
    )

    vgp_inspection_ids = fields.One2many(
        'vgp.inspection',
        'equipment_id',
        string='Vérifications VGP',
    )

    vgp_schedule_count = fields.Integer(
        string='Nb Échéanciers VGP',
        compute='_compute_vgp_schedule_count',
    )

    is_vgp_regulated = fields.Boolean(
        related='category_id.is_vgp_regulated',
        string='Soumis à VGP',
    )

    vgp_compliance_status = fields.Selection(
        COMPLIANCE_STATUSES,
        string='Conformité VGP',
        compute='_compute_vgp_compliance',
    )

    vgp_rental_blocked = fields.Boolean(
        string='Location Bloquée (VGP)',
        compute='_compute_vgp_compliance',
    )

    vgp_next_due_date = fields.Date(
        string='Prochaine VGP',
        compute='_compute_vgp_compliance',
    )

    # =========================================================================
    # COMPUTE METHODS
    # =========================================================================

    @api.depends('vgp_schedule_ids')
    def _compute_vgp_schedule_count(self):
        for equipment in self:
            equipment.vgp_schedule_count = len(
                equipment.vgp_schedule_ids.filtered(lambda s: not s.archived_at)
            )

    @api.depends(
        'vgp_schedule_ids.next_due_date', 'vgp_schedule_ids.archived_at',
        'vgp_schedule_ids.status', 'vgp_inspection_ids.result',
    )
    def _compute_vgp_compliance(self):
        classifier = self.env['vgp.compliance.classifier']
        today = self.env['vgp.date.math'].today()
        for equipment in self:
            if not equipment.id:
                equipment.vgp_compliance_status = 'compliant'
                equipment.vgp_rental_blocked = False
                equipment.vgp_next_due_date = False
                continue
            status = classifier.classify(equipment.id, today=today)
            equipment.vgp_compliance_status = status
            equipment.vgp_rental_blocked = status != 'compliant'
            equipment.vgp_next_due_date = classifier.get_governing_schedule(equipment.id).next_due_date

    # =========================================================================
    # ACTIONS
    # =========================================================================

    def action_view_vgp_schedules(self):
        self.ensure_one()
        return {
            'name': _('Échéanciers VGP - %s', self.name),
            'type': 'ir.actions.act_window',
            'res_model': 'vgp.schedule',
            'view_mode': 'list,form',
            'domain': [('equipment_id', '=', self.id)],
            'context': {
                'default_equipment_id': self.id,
                'default_interval_months': self.category_id.default_vgp_interval_months or 12,
            },
        }
