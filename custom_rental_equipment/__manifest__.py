# -*- coding: utf-8 -*-
# Part of Odoo. See LICENSE file for full copyright and licensing details.

{
    'name': 'Parc Matériel de Location',
    'version': '19.0.1.0.0',
    'category': 'Operations/Rental',
    'sequence': 96,
    'summary': 'Équipements de location: catégories, statut opérationnel, sorties et retours',
    'description': """
Parc Matériel de Location
=========================

Gestion du matériel loué (engins, nacelles, équipements de levage):

* **Équipements:**
    - Code interne automatique (EQP-0001)
    - Catégorie, numéro de série
    - Statut opérationnel suivi (disponible, en location, maintenance, hors service)

* **Locations:**
    - Sortie (checkout) avec client et date de retour prévue
    - Retour avec état constaté (bon, moyen, endommagé)
    - Un équipement ne peut être loué que s'il est disponible
""",
    'author': 'Équipe Développement Odoo',
    'website': 'https://www.odoo.com',
    'depends': [
        'base',
        'mail',
    ],
    'data': [
        'security/rental_groups.xml',
        'security/ir.model.access.csv',
        'data/rental_sequences.xml',
        'views/rental_equipment_views.xml',
        'views/rental_checkout_views.xml',
        'views/rental_menu.xml',
    ],
    'installable': True,
    'application': True,
    'auto_install': False,
    'license': 'LGPL-3',
}
