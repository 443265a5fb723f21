# -*- coding: utf-8 -*-
# Part of Odoo. See LICENSE file for full copyright and licensing details.

import logging

from odoo import _, api, fields, models
from odoo.exceptions import UserError, ValidationError

_logger = logging.getLogger(__name__)


OPERATIONAL_STATUSES = [
    ('available', 'Disponible'),
    ('in_use', 'En location'),
    ('maintenance', 'En maintenance'),
    ('out_of_service', 'Hors service'),
]


class RentalEquipment(models.Model):
    """
    Équipement du parc de location.

    Ajoute:
    - Code interne unique (EQP-####)
    - Statut opérationnel suivi dans le chatter
    - Liens vers les locations
    """
    _name = 'rental.equipment'
    _description = 'Équipement de Location'
    _inherit = ['mail.thread', 'mail.activity.mixin']
    _order = 'internal_code, id'
    _rec_names_search = ['name', 'internal_code', 'serial_number']

    # ========== CHAMPS PRINCIPAUX ==========

    name = fields.Char(
        string='Désignation',
        required=True,
        tracking=True,
    )

    internal_code = fields.Char(
        string='Code Interne',
        required=True,
        copy=False,
        readonly=True,
        index=True,
        default=lambda self: _('Nouveau'),
        help="Identifiant unique de l'équipement (ex: EQP-0001). Généré automatiquement."
    )

    serial_number = fields.Char(
        string='Numéro de Série',
        copy=False,
        tracking=True,
    )

    category_id = fields.Many2one(
        'rental.equipment.category',
        string='Catégorie',
        tracking=True,
        ondelete='restrict',
    )

    operational_status = fields.Selection(
        OPERATIONAL_STATUSES,
        string='Statut Opérationnel',
        required=True,
        default='available',
        tracking=True,
        help="Disponibilité physique de l'équipement"
    )

    company_id = fields.Many2one(
        'res.company',
        string='Société',
        required=True,
        default=lambda self: self.env.company,
    )

    active = fields.Boolean(default=True)

    notes = fields.Html(string='Notes')

    # ========== RELATIONS ==========

    checkout_ids = fields.One2many(
        'rental.checkout',
        'equipment_id',
        string='Locations',
    )

    checkout_count = fields.Integer(
        string='Nombre de Locations',
        compute='_compute_checkout_count',
    )

    current_checkout_id = fields.Many2one(
        'rental.checkout',
        string='Location en Cours',
        compute='_compute_current_checkout',
    )

    # ========== MÉTHODES COMPUTE ==========

    @api.depends('checkout_ids')
    def _compute_checkout_count(self):
        for equipment in self:
            equipment.checkout_count = len(equipment.checkout_ids)

    @api.depends('checkout_ids.state')
    def _compute_current_checkout(self):
        for equipment in self:
            ongoing = equipment.checkout_ids.filtered(lambda c: c.state == 'ongoing')
            equipment.current_checkout_id = ongoing[:1]

    # ========== CONTRAINTES ==========

    @api.constrains('internal_code')
    def _check_internal_code_unique(self):
        for equipment in self:
            if equipment.internal_code == _('Nouveau'):
                continue
            duplicates = self.with_context(active_test=False).search([
                ('internal_code', '=', equipment.internal_code),
                ('id', '!=', equipment.id),
            ], limit=1)
            if duplicates:
                raise ValidationError(_(
                    "Le code interne %s est déjà utilisé.", equipment.internal_code
                ))

    # ========== MÉTHODES CRUD ==========

    @api.model_create_multi
    def create(self, vals_list):
        """Génère le code interne (EQP-0001, EQP-0002...) lors de la création."""
        for vals in vals_list:
            if vals.get('internal_code', _('Nouveau')) == _('Nouveau'):
                vals['internal_code'] = self.env['ir.sequence'].next_by_code('rental.equipment') or _('Nouveau')
        return super().create(vals_list)

    # ========== INTERFACE STATUT ==========

    def get_asset_info(self):
        """Résumé minimal de l'équipement pour les modules consommateurs."""
        self.ensure_one()
        return {
            'id': self.id,
            'name': self.name,
            'category': self.category_id.name or False,
        }

    def set_operational_status(self, status, reason=None):
        """
        Change le statut opérationnel des équipements.

        Args:
            status: clé de OPERATIONAL_STATUSES
            reason: texte optionnel publié dans le chatter
        """
        allowed = dict(OPERATIONAL_STATUSES)
        if status not in allowed:
            raise UserError(_("Statut opérationnel inconnu: %s", status))

        to_update = self.filtered(lambda e: e.operational_status != status)
        if not to_update:
            return True

        to_update.write({'operational_status': status})
        if reason:
            for equipment in to_update:
                equipment.message_post(
                    body=_("Statut passé à « %(status)s »: %(reason)s",
                           status=allowed[status], reason=reason),
                    subject=_("Statut Opérationnel"),
                )
        _logger.info(
            "Equipment %s set to %s", ", ".join(to_update.mapped('internal_code')), status
        )
        return True

    # ========== MÉTHODES ACTION ==========

    def action_view_checkouts(self):
        """Ouvre la liste des locations de cet équipement."""
        self.ensure_one()
        return {
            'name': _('Locations - %s', self.name),
            'type': 'ir.actions.act_window',
            'res_model': 'rental.checkout',
            'view_mode': 'list,form',
            'domain': [('equipment_id', '=', self.id)],
            'context': {'default_equipment_id': self.id},
        }

    def action_set_maintenance(self):
        self.set_operational_status('maintenance')

    def action_set_available(self):
        self.set_operational_status('available')
