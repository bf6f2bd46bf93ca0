"""
Registration Service

Creates and edits registrants together with their nested records.
Every call runs in one transaction: either the registrant and all of
its sub-records are written, or nothing is.
"""

import logging

from django.contrib.auth import get_user_model
from django.db import transaction

from farmers.models import (
    Farmer,
    FarmParcel,
    HouseHead,
    LotDetail,
    OrganicFarmer,
    AgriculturalCommodity,
    OwnSharedFacility,
)

User = get_user_model()
logger = logging.getLogger(__name__)

# Sentinel for "key not sent" as opposed to an explicit null
_MISSING = object()


def _category_detail_model(relation):
    return Farmer._meta.get_field(relation).related_model


class RegistrationService:
    """
    Service for registrant sign-up and admin edits.
    """

    @staticmethod
    def username_taken(username, exclude_user=None):
        queryset = User.objects.filter(username=username)
        if exclude_user is not None:
            queryset = queryset.exclude(pk=exclude_user.pk)
        return queryset.exists()

    @staticmethod
    def _create_user(data, role):
        return User.objects.create_user(
            username=data.pop('username'),
            password=data.pop('password'),
            email=data.pop('email', '') or '',
            first_name=data.get('first_name', ''),
            last_name=data.get('surname', ''),
            role=role,
        )

    @staticmethod
    def _update_user(user, data):
        changed = []
        for field in ('username', 'email'):
            if field in data:
                setattr(user, field, data.pop(field) or '')
                changed.append(field)
        if changed:
            user.save(update_fields=changed)

    # =========================================================================
    # REGULAR FARMERS
    # =========================================================================

    @staticmethod
    def _pop_category_details(data):
        return {
            relation: data.pop(relation, None)
            for relation in Farmer.CATEGORY_DETAIL_RELATIONS.values()
        }

    @staticmethod
    @transaction.atomic
    def register_farmer(data):
        """
        Create a farmer with user, category details, house head and parcels.

        Only the detail record matching ``category_type`` is kept; lot
        details are only recorded for the FARMER category.
        """
        data = dict(data)
        details = RegistrationService._pop_category_details(data)
        house_head = data.pop('house_head', None)
        parcels = data.pop('parcels', None) or []

        if data.get('number_of_farms') is None:
            data['number_of_farms'] = len(parcels)

        user = RegistrationService._create_user(data, User.UserRole.FARMER)
        farmer = Farmer.objects.create(user=user, **data)

        relation = Farmer.CATEGORY_DETAIL_RELATIONS[farmer.category_type]
        if details.get(relation) is not None:
            _category_detail_model(relation).objects.create(farmer=farmer, **details[relation])

        if house_head is not None:
            HouseHead.objects.create(farmer=farmer, **house_head)

        for parcel_data in parcels:
            RegistrationService._save_parcel(farmer, dict(parcel_data))

        logger.info(f"Registered farmer {farmer.pk} ({user.username}), category {farmer.category_type}")
        return farmer

    @staticmethod
    @transaction.atomic
    def update_farmer(farmer, data):
        """
        Apply an admin edit.

        When the category changes, detail records of other categories
        are deleted and the matching one is upserted. A house head of
        ``None`` deletes it. Parcels with an ``id`` are updated in place;
        parcels without one are created.
        """
        data = dict(data)
        details = RegistrationService._pop_category_details(data)
        house_head = data.pop('house_head', _MISSING)
        parcels = data.pop('parcels', None)

        RegistrationService._update_user(farmer.user, data)

        for attr, value in data.items():
            setattr(farmer, attr, value)
        farmer.save()

        current = Farmer.CATEGORY_DETAIL_RELATIONS[farmer.category_type]
        for relation in Farmer.CATEGORY_DETAIL_RELATIONS.values():
            model = _category_detail_model(relation)
            if relation != current:
                model.objects.filter(farmer=farmer).delete()
            elif details.get(relation) is not None:
                model.objects.update_or_create(farmer=farmer, defaults=details[relation])

        # Lot details only exist for the FARMER category
        if farmer.category_type != Farmer.CategoryType.FARMER:
            LotDetail.objects.filter(parcel__farmer=farmer).delete()

        if house_head is None:
            HouseHead.objects.filter(farmer=farmer).delete()
        elif house_head is not _MISSING:
            HouseHead.objects.update_or_create(farmer=farmer, defaults=house_head)

        for parcel_data in parcels or []:
            RegistrationService._save_parcel(farmer, dict(parcel_data))

        logger.info(f"Updated farmer {farmer.pk}")
        return farmer

    @staticmethod
    def _save_parcel(farmer, parcel_data):
        lot = parcel_data.pop('lot', None)
        parcel_id = parcel_data.pop('id', None)

        parcel = None
        if parcel_id is not None:
            parcel = FarmParcel.objects.filter(pk=parcel_id, farmer=farmer).first()

        if parcel is None:
            parcel = FarmParcel.objects.create(farmer=farmer, **parcel_data)
        else:
            for attr, value in parcel_data.items():
                setattr(parcel, attr, value)
            parcel.save()

        if lot is not None and farmer.category_type == Farmer.CategoryType.FARMER:
            LotDetail.objects.update_or_create(parcel=parcel, defaults=lot)
        return parcel

    # =========================================================================
    # ORGANIC FARMERS
    # =========================================================================

    @staticmethod
    @transaction.atomic
    def register_organic_farmer(data):
        """Create an organic farmer with commodities and facilities."""
        data = dict(data)
        commodities = data.pop('commodities', None) or []
        facilities = data.pop('facilities', None) or []

        user = RegistrationService._create_user(data, User.UserRole.ORGANIC_FARMER)
        organic_farmer = OrganicFarmer.objects.create(user=user, **data)

        AgriculturalCommodity.objects.bulk_create([
            AgriculturalCommodity(organic_farmer=organic_farmer, **item) for item in commodities
        ])
        OwnSharedFacility.objects.bulk_create([
            OwnSharedFacility(organic_farmer=organic_farmer, **item) for item in facilities
        ])

        logger.info(f"Registered organic farmer {organic_farmer.pk} ({user.username})")
        return organic_farmer

    @staticmethod
    @transaction.atomic
    def update_organic_farmer(organic_farmer, data):
        """
        Apply an admin edit. Commodity and facility lists, when sent,
        replace the stored ones.
        """
        data = dict(data)
        commodities = data.pop('commodities', None)
        facilities = data.pop('facilities', None)

        RegistrationService._update_user(organic_farmer.user, data)

        for attr, value in data.items():
            setattr(organic_farmer, attr, value)
        organic_farmer.save()

        if commodities is not None:
            organic_farmer.commodities.all().delete()
            AgriculturalCommodity.objects.bulk_create([
                AgriculturalCommodity(organic_farmer=organic_farmer, **item) for item in commodities
            ])

        if facilities is not None:
            organic_farmer.facilities.all().delete()
            OwnSharedFacility.objects.bulk_create([
                OwnSharedFacility(organic_farmer=organic_farmer, **item) for item in facilities
            ])

        logger.info(f"Updated organic farmer {organic_farmer.pk}")
        return organic_farmer
