# -*- coding: utf-8 -*-
# Part of Odoo. See LICENSE file for full copyright and licensing details.

from . import (
    test_rental_checkout,
    test_rental_equipment,
)
