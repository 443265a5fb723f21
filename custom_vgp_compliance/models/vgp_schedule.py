# -*- coding: utf-8 -*-
# Part of Odoo. See LICENSE file for full copyright and licensing details.

"""
VGP schedule: the recurring re-inspection obligation of one equipment.

Due date rules (applied when an inspection is recorded):
- passed: inspection date + interval_months, schedule stays active
- conditional: inspection date + 6 months, schedule stays active
- failed: inspection date + 30 days, schedule becomes failed

The due date is never written directly: it changes only when an inspection
is recorded or through the justified edit (action_edit_due_date).
Schedules are archived (archived_at), never deleted.
"""

import logging

from dateutil.relativedelta import relativedelta

from odoo import _, api, fields, models
from odoo.exceptions import UserError

from ..exceptions import NotFoundError, VgpValidationError

_logger = logging.getLogger(__name__)

DEFAULT_INTERVAL_MONTHS = 12
CONDITIONAL_RECHECK_MONTHS = 6
FAILED_RECHECK_DAYS = 30

ENGINE_CONTEXT_KEY = 'vgp_schedule_engine'
ENGINE_FIELDS = {'next_due_date', 'last_inspection_date', 'status', 'archived_at'}


class VgpSchedule(models.Model):
    """Recurring VGP inspection obligation for one equipment."""

    _name = 'vgp.schedule'
    _description = 'Échéancier VGP'
    _inherit = ['mail.thread', 'mail.activity.mixin']
    _order = 'next_due_date, id'

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

    equipment_id = fields.Many2one(
        'rental.equipment',
        string='Équipement',
        required=True,
        index=True,
        tracking=True,
        ondelete='restrict',
    )

    company_id = fields.Many2one(
        related='equipment_id.company_id',
        store=True,
        readonly=True,
    )

    interval_months = fields.Integer(
        string='Périodicité (mois)',
        required=True,
        tracking=True,
        help="Intervalle réglementaire entre deux vérifications conformes (6, 12 ou 24 mois en pratique)."
    )

    last_inspection_date = fields.Date(
        string='Dernière Vérification',
        readonly=True,
        tracking=True,
    )

    next_due_date = fields.Date(
        string='Prochaine Échéance',
        required=True,
        readonly=True,
        index=True,
        tracking=True,
    )

    status = fields.Selection(
        [
            ('active', 'Actif'),
            ('completed', 'Réalisé'),
            ('failed', 'Non conforme'),
            ('archived', 'Archivé'),
        ],
        string='Statut',
        required=True,
        default='active',
        readonly=True,
        tracking=True,
    )

    created_by = fields.Char(
        string='Mis en place par',
        required=True,
        default=lambda self: self.env.user.name,
        help="Personne ayant décidé du suivi VGP de cet équipement."
    )

    notes = fields.Text(string='Notes')

    archived_at = fields.Datetime(
        string='Archivé le',
        readonly=True,
        copy=False,
        tracking=True,
        help="Un échéancier archivé n'intervient plus dans la conformité ni dans le blocage des locations."
    )

    is_archived = fields.Boolean(
        string='Archivé',
        compute='_compute_is_archived',
        store=True,
    )

    due_date_change_reason = fields.Text(
        string="Motif Dernière Modification d'Échéance",
        readonly=True,
        tracking=True,
    )

    inspection_ids = fields.One2many(
        'vgp.inspection',
        'schedule_id',
        string='Vérifications',
    )

    inspection_count = fields.Integer(
        string='Nombre de Vérifications',
        compute='_compute_inspection_count',
    )

    due_state = fields.Selection(
        [
            ('compliant', 'À jour'),
            ('soon', 'Échéance proche'),
            ('overdue', 'En retard'),
        ],
        string='État Échéance',
        compute='_compute_due_state',
        search='_search_due_state',
        help="Vide pour un échéancier archivé."
    )

    days_until_due = fields.Integer(
        string='Jours avant Échéance',
        compute='_compute_due_state',
        help="Négatif lorsque l'échéance est dépassée."
    )

    # =========================================================================
    # COMPUTE METHODS
    # =========================================================================

    @api.depends('archived_at')
    def _compute_is_archived(self):
        for schedule in self:
            schedule.is_archived = bool(schedule.archived_at)

    @api.depends('inspection_ids')
    def _compute_inspection_count(self):
        for schedule in self:
            schedule.inspection_count = len(schedule.inspection_ids)

    @api.depends('next_due_date', 'status', 'archived_at')
    def _compute_due_state(self):
        dates = self.env['vgp.date.math']
        today = dates.today()
        for schedule in self:
            if not schedule.next_due_date or schedule.archived_at:
                schedule.due_state = False
                schedule.days_until_due = 0
                continue
            schedule.due_state = schedule.classify_due_state(today=today)
            schedule.days_until_due = dates.days_between(today, schedule.next_due_date)

    def _due_state_domains(self, today):
        """Explicit-operator domains matching each classify_due_state() result."""
        limit = self.env['vgp.date.math'].add_days(today, self._get_alert_days())
        return {
            'overdue': [
                '&', '&', ('archived_at', '=', False),
                ('next_due_date', '<', today), ('status', '!=', 'completed'),
            ],
            'soon': [
                '&', '&', ('archived_at', '=', False), ('next_due_date', '<=', limit),
                '|', ('next_due_date', '>=', today), ('status', '=', 'completed'),
            ],
            'compliant': [
                '&', ('archived_at', '=', False), ('next_due_date', '>', limit),
            ],
            False: [('archived_at', '!=', False)],
        }

    def _search_due_state(self, operator, value):
        if operator not in ('=', '!=', 'in', 'not in'):
            raise UserError(_("Opérateur non supporté pour l'état d'échéance: %s", operator))
        values = [value] if isinstance(value, str) or value is False or value is None else list(value)
        domains = self._due_state_domains(self.env['vgp.date.math'].today())
        selected = [domains[state or False] for state in values if (state or False) in domains]
        if not selected:
            domain = [('id', '=', False)]
        else:
            domain = ['|'] * (len(selected) - 1) + [leaf for sub in selected for leaf in sub]
        if operator in ('!=', 'not in'):
            return ['!'] + domain
        return domain

    # =========================================================================
    # CRUD
    # =========================================================================

    @api.model_create_multi
    def create(self, vals_list):
        """Validate and derive next_due_date from the anchor date."""
        dates = self.env['vgp.date.math']
        today = dates.today()
        for vals in vals_list:
            self._prepare_schedule_vals(vals, today)
            if vals.get('name', _('Nouveau')) == _('Nouveau'):
                vals['name'] = self.env['ir.sequence'].next_by_code('vgp.schedule') or _('Nouveau')

        schedules = super().create(vals_list)
        for schedule in schedules:
            _logger.info(
                "VGP schedule %s created for %s (every %d months, due %s) by %s",
                schedule.name, schedule.equipment_id.internal_code,
                schedule.interval_months, schedule.next_due_date, schedule.created_by,
            )
        return schedules

    def write(self, vals):
        if ENGINE_FIELDS.intersection(vals) and not self.env.context.get(ENGINE_CONTEXT_KEY):
            raise UserError(_(
                "L'échéance et le statut d'un échéancier VGP ne se modifient qu'en enregistrant "
                "une vérification ou via une modification d'échéance motivée."
            ))
        if 'equipment_id' in vals and any(s.equipment_id.id != vals['equipment_id'] for s in self):
            raise UserError(_("L'équipement d'un échéancier VGP ne peut pas être changé."))
        if 'created_by' in vals and not (vals['created_by'] or '').strip():
            raise VgpValidationError(_("Le responsable de la mise en place du suivi est obligatoire."))
        return super().write(vals)

    def unlink(self):
        raise UserError(_(
            "Les échéanciers VGP ne peuvent pas être supprimés. Archivez-les pour conserver l'historique."
        ))

    @api.model
    def _prepare_schedule_vals(self, vals, today):
        """Fill defaults, validate, and compute next_due_date in place."""
        equipment_id = vals.get('equipment_id')
        equipment = self.env['rental.equipment'].browse(equipment_id).exists() if equipment_id else None

        if vals.get('interval_months') is None and equipment:
            vals['interval_months'] = (
                equipment.category_id.default_vgp_interval_months or DEFAULT_INTERVAL_MONTHS
            )
        if vals.get('created_by') is None:
            vals['created_by'] = self.env.user.name

        errors = self._validate_schedule_vals(vals, equipment, today)
        if errors:
            raise VgpValidationError(errors)

        anchor = fields.Date.to_date(vals.get('last_inspection_date')) or today
        vals['next_due_date'] = self.env['vgp.date.math'].add_months(anchor, vals['interval_months'])
        vals['status'] = 'active'
        vals.pop('archived_at', None)
        return vals

    @api.model
    def _validate_schedule_vals(self, vals, equipment, today):
        errors = []

        if not equipment:
            errors.append(_("Équipement introuvable."))

        interval = vals.get('interval_months')
        if isinstance(interval, bool) or not isinstance(interval, int):
            errors.append(_("La périodicité doit être un nombre entier de mois."))
        elif interval < 1:
            errors.append(_("La périodicité doit être d'au moins 1 mois."))

        raw_last = vals.get('last_inspection_date')
        if raw_last:
            try:
                last = fields.Date.to_date(raw_last)
            except (TypeError, ValueError):
                last = None
                errors.append(_("Date de dernière vérification invalide: %s", raw_last))
            if last:
                max_years = self._get_max_history_years()
                if last > today:
                    errors.append(_("La date de dernière vérification ne peut pas être dans le futur."))
                elif last < today - relativedelta(years=max_years):
                    errors.append(_(
                        "La date de dernière vérification a plus de %s ans: veuillez vérifier la saisie.",
                        max_years,
                    ))

        if not (vals.get('created_by') or '').strip():
            errors.append(_("Le responsable de la mise en place du suivi est obligatoire."))

        return errors

    # =========================================================================
    # CONFIGURATION HELPERS
    # =========================================================================

    @api.model
    def _get_alert_days(self):
        ICP = self.env['ir.config_parameter'].sudo()
        return int(ICP.get_param('custom_vgp_compliance.alert_days_before_due', '30'))

    @api.model
    def _get_max_history_years(self):
        ICP = self.env['ir.config_parameter'].sudo()
        return int(ICP.get_param('custom_vgp_compliance.max_history_years', '5'))

    # =========================================================================
    # SCHEDULE ENGINE
    # =========================================================================

    @api.model
    def create_schedule(self, equipment_id, interval_months=None, last_inspection_date=None,
                        created_by=None, notes=None):
        """Start VGP monitoring of an equipment.

        Args:
            equipment_id: rental.equipment id or record
            interval_months: months between passed inspections (category default if None)
            last_inspection_date: anchor of the first cycle (today if empty)
            created_by: who configured the monitoring (current user if None)
            notes: free text

        Returns:
            vgp.schedule record

        Raises:
            VgpValidationError: with every invalid input
        """
        vals = {
            'equipment_id': getattr(equipment_id, 'id', equipment_id),
            'interval_months': interval_months,
            'last_inspection_date': last_inspection_date or False,
            'notes': notes or False,
        }
        if created_by is not None:
            vals['created_by'] = created_by
        return self.create(vals)

    def compute_next_due_date(self, inspection_date, result):
        """Due date and schedule status following an inspection.

        The inspection date anchors the new cycle, not the previous due date.

        Returns:
            tuple: (next_due_date, status)
        """
        self.ensure_one()
        dates = self.env['vgp.date.math']
        inspection_date = fields.Date.to_date(inspection_date)

        if result == 'passed':
            return dates.add_months(inspection_date, self.interval_months), 'active'
        if result == 'conditional':
            return dates.add_months(inspection_date, CONDITIONAL_RECHECK_MONTHS), 'active'
        if result == 'failed':
            return dates.add_days(inspection_date, FAILED_RECHECK_DAYS), 'failed'
        raise VgpValidationError(_("Résultat de vérification inconnu: %s", result))

    def _apply_inspection(self, inspection_date, next_due_date, status):
        self.ensure_one()
        self.with_context(**{ENGINE_CONTEXT_KEY: True}).write({
            'last_inspection_date': inspection_date,
            'next_due_date': next_due_date,
            'status': status,
        })

    def action_edit_due_date(self, new_date, reason):
        """Administrative override of the due date (e.g. extension granted).

        Raises:
            NotFoundError: schedule archived
            VgpValidationError: missing date or blank reason
        """
        self.ensure_one()
        if self.archived_at:
            raise NotFoundError(_("L'échéancier %s est archivé.", self.name))

        errors = []
        parsed_date = None
        if not new_date:
            errors.append(_("La nouvelle échéance est obligatoire."))
        else:
            try:
                parsed_date = fields.Date.to_date(new_date)
            except (TypeError, ValueError):
                errors.append(_("Nouvelle échéance invalide: %s", new_date))
        if not (reason or '').strip():
            errors.append(_("Le motif de modification de l'échéance est obligatoire."))
        if errors:
            raise VgpValidationError(errors)

        old_date = self.next_due_date
        self.with_context(**{ENGINE_CONTEXT_KEY: True}).write({
            'next_due_date': parsed_date,
            'due_date_change_reason': reason.strip(),
        })
        self.message_post(
            body=_(
                "Échéance modifiée du %(old)s au %(new)s. Motif: %(reason)s",
                old=old_date.strftime('%d/%m/%Y') if old_date else '-',
                new=parsed_date.strftime('%d/%m/%Y'),
                reason=reason.strip(),
            ),
            subject=_("Modification Échéance"),
        )
        _logger.info(
            "VGP schedule %s due date changed %s -> %s by %s",
            self.name, old_date, parsed_date, self.env.user.name,
        )
        return True

    def action_archive_schedule(self):
        """Stop monitoring. Idempotent: archived_at keeps its first value."""
        to_archive = self.filtered(lambda s: not s.archived_at)
        if not to_archive:
            return True
        to_archive.with_context(**{ENGINE_CONTEXT_KEY: True}).write({
            'archived_at': fields.Datetime.now(),
            'status': 'archived',
        })
        for schedule in to_archive:
            schedule.message_post(
                body=_("Suivi VGP arrêté par %s.", self.env.user.name),
                subject=_("Archivage"),
            )
        _logger.info("VGP schedules archived: %s", ", ".join(to_archive.mapped('name')))
        return True

    def classify_due_state(self, today=None):
        """Return 'overdue', 'soon' or 'compliant' for this schedule's due date.

        An archived schedule is inert and returns False.
        """
        self.ensure_one()
        if self.archived_at:
            return False
        dates = self.env['vgp.date.math']
        today = today or dates.today()
        if dates.is_past(self.next_due_date, today=today) and self.status != 'completed':
            return 'overdue'
        if self.next_due_date <= dates.add_days(today, self._get_alert_days()):
            return 'soon'
        return 'compliant'

    # =========================================================================
    # ACTIONS
    # =========================================================================

    def action_record_inspection(self):
        self.ensure_one()
        if self.archived_at:
            raise NotFoundError(_("L'échéancier %s est archivé.", self.name))
        return {
            'name': _('Enregistrer une Vérification - %s', self.equipment_id.display_name),
            'type': 'ir.actions.act_window',
            'res_model': 'vgp.inspection.record.wizard',
            'view_mode': 'form',
            'target': 'new',
            'context': {'default_schedule_id': self.id},
        }

    def action_open_due_date_wizard(self):
        self.ensure_one()
        return {
            'name': _("Modifier l'Échéance - %s", self.name),
            'type': 'ir.actions.act_window',
            'res_model': 'vgp.schedule.due.date.wizard',
            'view_mode': 'form',
            'target': 'new',
            'context': {
                'default_schedule_id': self.id,
                'default_new_date': self.next_due_date,
            },
        }

    def action_view_inspections(self):
        self.ensure_one()
        return {
            'name': _('Vérifications - %s', self.name),
            'type': 'ir.actions.act_window',
            'res_model': 'vgp.inspection',
            'view_mode': 'list,form',
            'domain': [('schedule_id', '=', self.id)],
        }
