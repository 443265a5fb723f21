# -*- coding: utf-8 -*-
# Part of Odoo. See LICENSE file for full copyright and licensing details.

from odoo import _, api, fields, models
from odoo.exceptions import ValidationError


class RentalEquipmentCategory(models.Model):
    """Catégorie de matériel (nacelle, chariot, grue...)."""
    _name = 'rental.equipment.category'
    _description = 'Catégorie de Matériel'
    _order = 'sequence, name'

    name = fields.Char(
        string='Nom',
        required=True,
        translate=True,
    )

    code = fields.Char(
        string='Code',
        index=True,
        help="Code technique de la catégorie (ex: nacelle, chariot)"
    )

    description = fields.Text(
        string='Description',
        translate=True,
    )

    sequence = fields.Integer(default=10)
    active = fields.Boolean(default=True)

    equipment_ids = fields.One2many(
        'rental.equipment',
        'category_id',
        string='Équipements',
    )

    equipment_count = fields.Integer(
        string="Nombre d'Équipements",
        compute='_compute_equipment_count',
    )

    @api.depends('equipment_ids')
    def _compute_equipment_count(self):
        for category in self:
            category.equipment_count = len(category.equipment_ids)

    @api.constrains('code')
    def _check_code_unique(self):
        for category in self:
            if not category.code:
                continue
            duplicates = self.search([
                ('code', '=', category.code),
                ('id', '!=', category.id),
            ], limit=1)
            if duplicates:
                raise ValidationError(_(
                    "Le code de catégorie %(code)s est déjà utilisé par %(other)s.",
                    code=category.code,
                    other=duplicates.display_name,
                ))
