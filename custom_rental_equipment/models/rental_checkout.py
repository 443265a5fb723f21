# -*- coding: utf-8 -*-
# Part of Odoo. See LICENSE file for full copyright and licensing details.

import logging

from odoo import _, api, fields, models
from odoo.exceptions import UserError, ValidationError

_logger = logging.getLogger(__name__)


class RentalCheckout(models.Model):
    """
    Sortie d'un équipement chez un client.

    Workflow: Brouillon → En cours → Retourné / Annulé
    """
    _name = 'rental.checkout'
    _description = 'Location Matériel'
    _inherit = ['mail.thread', 'mail.activity.mixin']
    _order = 'checkout_date desc, id desc'

    # ========== IDENTIFICATION ==========

    name = fields.Char(
        string='Référence',
        required=True,
        copy=False,
        readonly=True,
        index=True,
        default=lambda self: _('Nouveau'),
        help="Référence unique de la location (ex: LOC-0001)"
    )

    equipment_id = fields.Many2one(
        'rental.equipment',
        string='Équipement',
        required=True,
        tracking=True,
        ondelete='restrict',
    )

    # ========== CLIENT ==========

    client_name = fields.Char(
        string='Client',
        required=True,
        tracking=True,
    )

    client_contact = fields.Char(
        string='Contact Client',
        help="Téléphone ou e-mail du client"
    )

    # ========== DATES ==========

    checkout_date = fields.Datetime(
        string='Date de Sortie',
        readonly=True,
        copy=False,
    )

    expected_return_date = fields.Date(
        string='Retour Prévu',
        tracking=True,
    )

    return_date = fields.Datetime(
        string='Date de Retour',
        readonly=True,
        copy=False,
    )

    # ========== RETOUR ==========

    return_condition = fields.Selection(
        [
            ('good', 'Bon état'),
            ('fair', 'État moyen'),
            ('damaged', 'Endommagé'),
        ],
        string='État au Retour',
        tracking=True,
    )

    return_notes = fields.Text(string='Remarques Retour')
    notes = fields.Text(string='Notes')

    # ========== WORKFLOW ==========

    state = fields.Selection(
        [
            ('draft', 'Brouillon'),
            ('ongoing', 'En cours'),
            ('returned', 'Retourné'),
            ('cancelled', 'Annulé'),
        ],
        string='État',
        required=True,
        default='draft',
        tracking=True,
    )

    user_id = fields.Many2one(
        'res.users',
        string='Responsable',
        default=lambda self: self.env.user,
    )

    company_id = fields.Many2one(
        'res.company',
        string='Société',
        required=True,
        default=lambda self: self.env.company,
    )

    # ========== CONTRAINTES ==========

    @api.constrains('client_name')
    def _check_client_name(self):
        for checkout in self:
            if not (checkout.client_name or '').strip():
                raise ValidationError(_("Le nom du client est obligatoire."))

    # ========== MÉTHODES CRUD ==========

    @api.model_create_multi
    def create(self, vals_list):
        for vals in vals_list:
            if vals.get('name', _('Nouveau')) == _('Nouveau'):
                vals['name'] = self.env['ir.sequence'].next_by_code('rental.checkout') or _('Nouveau')
        return super().create(vals_list)

    # ========== ACTIONS WORKFLOW ==========

    def action_checkout(self):
        """
        Sortie de l'équipement.
        Transitions: draft → ongoing ; équipement available → in_use
        """
        for checkout in self:
            if checkout.state != 'draft':
                raise UserError(_("Seules les locations en brouillon peuvent être sorties."))

            equipment = checkout.equipment_id
            other_ongoing = self.search_count([
                ('equipment_id', '=', equipment.id),
                ('state', '=', 'ongoing'),
                ('id', '!=', checkout.id),
            ])
            if other_ongoing:
                raise UserError(_(
                    "L'équipement %s est déjà en location.", equipment.display_name
                ))
            if equipment.operational_status != 'available':
                status_labels = dict(equipment._fields['operational_status'].selection)
                raise UserError(_(
                    "L'équipement %(equipment)s n'est pas disponible (statut: %(status)s).",
                    equipment=equipment.display_name,
                    status=status_labels.get(equipment.operational_status),
                ))

            checkout.write({
                'state': 'ongoing',
                'checkout_date': fields.Datetime.now(),
            })
            equipment.set_operational_status('in_use')
            _logger.info("Checkout %s: %s rented to %s", checkout.name, equipment.internal_code, checkout.client_name)
            checkout.message_post(
                body=_("Équipement sorti pour le client %s", checkout.client_name),
                subject=_("Sortie"),
            )
        return True

    def action_return(self):
        """
        Retour de l'équipement.
        Transitions: ongoing → returned ; équipement in_use → available
        """
        for checkout in self:
            if checkout.state != 'ongoing':
                raise UserError(_("Seules les locations en cours peuvent être retournées."))

            checkout.write({
                'state': 'returned',
                'return_date': fields.Datetime.now(),
            })
            # Un équipement passé hors service pendant la location le reste.
            if checkout.equipment_id.operational_status == 'in_use':
                checkout.equipment_id.set_operational_status('available')
            checkout.message_post(
                body=_("Équipement retourné."),
                subject=_("Retour"),
            )
        return True

    def action_cancel(self):
        for checkout in self:
            if checkout.state != 'draft':
                raise UserError(_("Seules les locations en brouillon peuvent être annulées."))
        self.write({'state': 'cancelled'})
        return True
