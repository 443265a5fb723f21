# -*- coding: utf-8 -*-
# Part of Odoo. See LICENSE file for full copyright and licensing details.

from . import vgp_inspection_record_wizard
from . import vgp_schedule_due_date_wizard
from . import vgp_compliance_report_wizard
