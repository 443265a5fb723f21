# -*- coding: utf-8 -*-
# Part of Odoo. See LICENSE file for full copyright and licensing details.

from . import vgp_date_math
from . import vgp_compliance_classifier
from . import vgp_rental_gate
from . import vgp_compliance_report
