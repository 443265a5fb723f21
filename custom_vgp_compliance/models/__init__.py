# -*- coding: utf-8 -*-
# Part of Odoo. See LICENSE file for full copyright and licensing details.

from . import vgp_schedule
from . import vgp_inspection
from . import rental_equipment
from . import rental_checkout
from . import res_config_settings
