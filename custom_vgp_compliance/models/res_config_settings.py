# -*- coding: utf-8 -*-
# Part of Odoo. See LICENSE file for full copyright and licensing details.

import pytz

from odoo import api, fields, models, _
from odoo.exceptions import ValidationError


class ResConfigSettings(models.TransientModel):
    """
    Paramètres VGP.

    - Fuseau horaire de référence pour "aujourd'hui"
    - Délai d'alerte avant échéance
    - Ancienneté maximale acceptée pour une dernière vérification
    """
    _inherit = 'res.config.settings'

    custom_vgp_compliance_timezone = fields.Selection(
        '_tz_get',
        string='Fuseau Horaire VGP',
        default='Europe/Paris',
        config_parameter='custom_vgp_compliance.timezone',
        help="Fuseau utilisé pour déterminer la date du jour dans toutes les règles VGP"
    )

    custom_vgp_compliance_alert_days_before_due = fields.Integer(
        string='Alerte avant Échéance (jours)',
        default=30,
        config_parameter='custom_vgp_compliance.alert_days_before_due',
        help="Un échéancier passe en 'Échéance proche' lorsque la VGP est due dans ce délai"
    )

    custom_vgp_compliance_max_history_years = fields.Integer(
        string='Ancienneté Max. Dernière VGP (années)',
        default=5,
        config_parameter='custom_vgp_compliance.max_history_years',
        help="Une date de dernière vérification plus ancienne est refusée à la création d'un échéancier"
    )

    @api.model
    def _tz_get(self):
        return [(tz, tz) for tz in sorted(pytz.all_timezones_set)]

    @api.constrains('custom_vgp_compliance_alert_days_before_due', 'custom_vgp_compliance_max_history_years')
    def _check_vgp_settings(self):
        for settings in self:
            if settings.custom_vgp_compliance_alert_days_before_due < 0:
                raise ValidationError(_("Le délai d'alerte VGP ne peut pas être négatif."))
            if settings.custom_vgp_compliance_max_history_years < 1:
                raise ValidationError(_("L'ancienneté maximale doit être d'au moins 1 an."))
