# -*- coding: utf-8 -*-
# Part of Odoo. See LICENSE file for full copyright and licensing details.

from . import (
    test_vgp_date_math,
    test_vgp_schedule,
    test_vgp_inspection_recording,
    test_vgp_compliance_classifier,
    test_vgp_rental_gate,
    test_vgp_compliance_report,
)
