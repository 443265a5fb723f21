# -*- coding: utf-8 -*-
# Part of Odoo. See LICENSE file for full copyright and licensing details.

"""
VGP inspection: immutable record of one completed inspection.

Recording (record_inspection) validates the whole form at once, snapshots
the computed next due date on the inspection, advances the schedule and,
on a failed result, asks the equipment to go out of service. That last step
is best effort: the regulatory record is kept even if the status sync fails.
"""

import logging

import psycopg2

from odoo import _, api, fields, models
from odoo.exceptions import UserError

from ..exceptions import NotFoundError, PersistenceError, VgpValidationError

_logger = logging.getLogger(__name__)

INSPECTION_RESULTS = [
    ('passed', 'Conforme'),
    ('conditional', 'Conforme avec réserves'),
    ('failed', 'Non conforme'),
]

VERIFICATION_TYPES = [
    ('periodic', 'Périodique'),
    ('initial', 'Initiale'),
    ('return_to_service', 'Remise en service'),
]

REQUIRED_FIELDS = {
    'inspection_date': "Date de vérification",
    'inspector_name': "Nom de l'inspecteur",
    'inspector_company': "Organisme d'inspection",
    'result': "Résultat",
}

ALLOWED_DATA_KEYS = {
    'inspection_date', 'inspector_name', 'inspector_company', 'inspector_accreditation',
    'certification_number', 'result', 'findings', 'verification_type',
    'certificate_url', 'certificate_attachment_id',
}


class VgpInspection(models.Model):
    """Completed VGP inspection. Corrections are new records, never edits."""

    _name = 'vgp.inspection'
    _description = 'Vérification VGP'
    _inherit = ['mail.thread']
    _order = 'inspection_date desc, id desc'

    # =========================================================================
    # FIELDS
    # =========================================================================

    name = fields.Char(
        string='Référence',
        required=True,
        copy=False,
        readonly=True,
        index=True,
        default=lambda self: _('Nouveau'),
    )

    schedule_id = fields.Many2one(
        'vgp.schedule',
        string='Échéancier',
        required=True,
        readonly=True,
        index=True,
        ondelete='restrict',
    )

    equipment_id = fields.Many2one(
        'rental.equipment',
        string='Équipement',
        required=True,
        readonly=True,
        index=True,
        ondelete='restrict',
    )

    company_id = fields.Many2one(
        related='equipment_id.company_id',
        store=True,
        readonly=True,
    )

    inspection_date = fields.Date(
        string='Date de Vérification',
        required=True,
        readonly=True,
        index=True,
    )

    verification_type = fields.Selection(
        VERIFICATION_TYPES,
        string='Type de Vérification',
        required=True,
        default='periodic',
        readonly=True,
    )

    inspector_name = fields.Char(string='Inspecteur', required=True, readonly=True)
    inspector_company = fields.Char(string='Organisme', required=True, readonly=True)
    inspector_accreditation = fields.Char(string="N° d'Accréditation", readonly=True)
    certification_number = fields.Char(string='N° de Certificat', readonly=True)

    result = fields.Selection(
        INSPECTION_RESULTS,
        string='Résultat',
        required=True,
        readonly=True,
    )

    findings = fields.Text(string='Observations', readonly=True)

    next_inspection_date = fields.Date(
        string='Prochaine Vérification',
        required=True,
        readonly=True,
        help="Échéance calculée au moment de l'enregistrement. Reste stable même si l'échéancier est modifié ensuite."
    )

    certificate_url = fields.Char(string='Lien Certificat', readonly=True)

    certificate_attachment_id = fields.Many2one(
        'ir.attachment',
        string='Certificat',
        readonly=True,
    )

    has_certificate = fields.Boolean(
        string='Certificat Fourni',
        compute='_compute_has_certificate',
        store=True,
    )

    performed_by_id = fields.Many2one(
        'res.users',
        string='Saisi par',
        readonly=True,
        default=lambda self: self.env.user,
    )

    # =========================================================================
    # COMPUTE / CONSTRAINTS
    # =========================================================================

    @api.depends('certificate_url', 'certificate_attachment_id')
    def _compute_has_certificate(self):
        for inspection in self:
            inspection.has_certificate = bool(
                (inspection.certificate_url or '').strip() or inspection.certificate_attachment_id
            )

    @api.constrains('inspection_date')
    def _check_inspection_date_not_future(self):
        today = self.env['vgp.date.math'].today()
        for inspection in self:
            if inspection.inspection_date and inspection.inspection_date > today:
                raise VgpValidationError(_("La date de vérification ne peut pas être dans le futur."))

    # =========================================================================
    # CRUD
    # =========================================================================

    @api.model_create_multi
    def create(self, vals_list):
        for vals in vals_list:
            if vals.get('name', _('Nouveau')) == _('Nouveau'):
                vals['name'] = self.env['ir.sequence'].next_by_code('vgp.inspection') or _('Nouveau')
        return super().create(vals_list)

    def write(self, vals):
        # mail.thread bookkeeping only; business fields are frozen once recorded
        if set(vals) - {'message_main_attachment_id'}:
            raise UserError(_(
                "Une vérification VGP enregistrée ne peut pas être modifiée. "
                "Enregistrez une nouvelle vérification pour corriger."
            ))
        return super().write(vals)

    def unlink(self):
        raise UserError(_("Les vérifications VGP ne peuvent pas être supprimées."))

    # =========================================================================
    # INSPECTION RECORDER
    # =========================================================================

    @api.model
    def record_inspection(self, schedule, data):
        """Record a completed inspection against a schedule.

        Args:
            schedule: vgp.schedule record or id
            data: dict with inspection_date, inspector_name, inspector_company,
                  result and optional inspector_accreditation, certification_number,
                  findings, verification_type, certificate_url, certificate_attachment_id

        Returns:
            vgp.inspection record

        Raises:
            NotFoundError: schedule missing or archived
            VgpValidationError: every invalid field at once
            PersistenceError: database failure while writing
        """
        schedule = self._get_recordable_schedule(schedule)
        values = self._validate_inspection_data(data)

        next_due_date, schedule_status = schedule.compute_next_due_date(
            values['inspection_date'], values['result']
        )
        values.update({
            'schedule_id': schedule.id,
            'equipment_id': schedule.equipment_id.id,
            'next_inspection_date': next_due_date,
        })

        try:
            with self.env.cr.savepoint():
                inspection = self.create(values)
                schedule._apply_inspection(values['inspection_date'], next_due_date, schedule_status)
        except psycopg2.Error as exc:
            _logger.error("VGP: failed to record inspection for schedule %s: %s", schedule.name, exc)
            raise PersistenceError(_(
                "L'enregistrement de la vérification a échoué. Veuillez réessayer."
            )) from exc

        _logger.info(
            "VGP inspection %s recorded on %s: %s, next due %s",
            inspection.name, schedule.equipment_id.internal_code, inspection.result, next_due_date,
        )
        schedule.message_post(
            body=_(
                "Vérification du %(date)s: %(result)s. Prochaine échéance: %(next)s",
                date=inspection.inspection_date.strftime('%d/%m/%Y'),
                result=dict(INSPECTION_RESULTS)[inspection.result],
                next=next_due_date.strftime('%d/%m/%Y'),
            ),
            subject=_("Vérification VGP"),
        )

        if inspection.result == 'failed':
            inspection._request_out_of_service()
        return inspection

    @api.model
    def _get_recordable_schedule(self, schedule):
        schedule_id = getattr(schedule, 'id', schedule)
        record = self.env['vgp.schedule'].browse(schedule_id).exists() if schedule_id else None
        if not record:
            raise NotFoundError(_("Échéancier VGP introuvable."))
        if record.archived_at:
            raise NotFoundError(_("L'échéancier %s est archivé.", record.name))
        return record

    @api.model
    def _validate_inspection_data(self, data):
        """Return cleaned create values, or raise with every violation found."""
        data = data or {}
        errors = []

        for field_name, label in REQUIRED_FIELDS.items():
            value = data.get(field_name)
            if isinstance(value, str):
                value = value.strip()
            if not value:
                errors.append(_("Champ obligatoire manquant: %s", label))

        inspection_date = None
        if data.get('inspection_date'):
            try:
                inspection_date = fields.Date.to_date(data['inspection_date'])
            except (TypeError, ValueError):
                errors.append(_("Date de vérification invalide: %s", data['inspection_date']))
            if inspection_date and inspection_date > self.env['vgp.date.math'].today():
                errors.append(_("La date de vérification ne peut pas être dans le futur."))

        result = data.get('result')
        if result and result not in dict(INSPECTION_RESULTS):
            errors.append(_(
                "Résultat invalide: %(result)s (valeurs possibles: %(allowed)s)",
                result=result,
                allowed=", ".join(dict(INSPECTION_RESULTS)),
            ))

        verification_type = data.get('verification_type') or 'periodic'
        if verification_type not in dict(VERIFICATION_TYPES):
            errors.append(_("Type de vérification invalide: %s", verification_type))

        if errors:
            raise VgpValidationError(errors)

        values = {key: data[key] for key in ALLOWED_DATA_KEYS if data.get(key)}
        for key in ('inspector_name', 'inspector_company', 'inspector_accreditation',
                    'certification_number', 'certificate_url', 'findings'):
            if isinstance(values.get(key), str):
                values[key] = values[key].strip() or False
        values.update({
            'inspection_date': inspection_date,
            'verification_type': verification_type,
        })
        return values

    def _request_out_of_service(self):
        """Best effort: a failure here never undoes the inspection."""
        self.ensure_one()
        equipment = self.equipment_id
        try:
            with self.env.cr.savepoint():
                equipment.sudo().set_operational_status(
                    'out_of_service',
                    reason=_("Vérification VGP %s non conforme", self.name),
                )
        except Exception:
            _logger.exception(
                "VGP: could not set %s out of service after inspection %s",
                equipment.internal_code, self.name,
            )
            return False
        return True
