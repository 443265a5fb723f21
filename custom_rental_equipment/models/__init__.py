# -*- coding: utf-8 -*-
# Part of Odoo. See LICENSE file for full copyright and licensing details.

from . import rental_equipment_category
from . import rental_equipment
from . import rental_checkout
