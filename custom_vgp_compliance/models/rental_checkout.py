# -*- coding: utf-8 -*-
# Part of Odoo. See LICENSE file for full copyright and licensing details.

"""
Extension of rental.checkout: refuse checkout of equipment whose VGP is
overdue or whose last inspection failed.
"""

from odoo import models


class RentalCheckout(models.Model):
    _inherit = 'rental.checkout'

    def action_checkout(self):
        """Check the VGP gate right before the state change."""
        gate = self.env['vgp.rental.gate']
        for checkout in self:
            if checkout.state == 'draft':
                gate.ensure_rental_allowed(checkout.equipment_id.id)
        return super().action_checkout()
