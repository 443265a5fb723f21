# -*- coding: utf-8 -*-
# Part of Odoo. See LICENSE file for full copyright and licensing details.

{
    'name': 'Conformité VGP',
    'version': '19.0.1.0.0',
    'category': 'Operations/Rental',
    'sequence': 97,
    'summary': 'Vérifications générales périodiques: échéanciers, vérifications, blocage des locations, rapport',
    'description': """
Conformité VGP (Vérifications Générales Périodiques)
====================================================

Suivi réglementaire des équipements loués (levage, nacelles, engins):

* **Échéanciers:**
    - Périodicité en mois (défaut par catégorie)
    - Prochaine échéance calculée, jamais saisie
    - Modification d'échéance uniquement avec motif (historisé)
    - Archivage, jamais de suppression

* **Vérifications:**
    - Saisie avec inspecteur, organisme, résultat, certificat
    - Conforme: date + périodicité; avec réserves: +6 mois; non conforme: +30 jours
    - Non conforme: équipement mis hors service
    - Enregistrements immuables

* **Conformité:**
    - Statut conforme / en retard / non conforme par équipement
    - Blocage des locations au moment de la sortie
    - Rapport de période: taux de conformité, certificats manquants, équipements en retard
""",
    'author': 'Équipe Développement Odoo',
    'website': 'https://www.odoo.com',
    'depends': [
        'custom_rental_equipment',
        'mail',
    ],
    'data': [
        # Security
        'security/vgp_groups.xml',
        'security/ir.model.access.csv',
        # Data
        'data/vgp_sequences.xml',
        'data/vgp_config_data.xml',
        # Views
        'views/vgp_schedule_views.xml',
        'views/vgp_inspection_views.xml',
        'views/rental_equipment_views.xml',
        'views/res_config_settings_views.xml',
        'wizards/vgp_inspection_record_wizard_views.xml',
        'wizards/vgp_schedule_due_date_wizard_views.xml',
        'wizards/vgp_compliance_report_wizard_views.xml',
        'views/vgp_menu.xml',
    ],
    'installable': True,
    'application': False,
    'auto_install': False,
    'license': 'LGPL-3',
}
