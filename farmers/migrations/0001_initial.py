import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models

STATUS_CHOICES = [
    ('APPLICANTS', 'Applicant'),
    ('NOT_QUALIFIED', 'Not Qualified'),
    ('REGISTERED', 'Registered'),
    ('ARCHIVED', 'Archived'),
]

BUSINESS_ROLE_CHOICES = [
    ('PRIMARY_BUSINESS', 'Primary Business'),
    ('SECONDARY_BUSINESS', 'Secondary Business'),
    ('NOT_APPLICABLE', 'Not Applicable'),
]


def registrant_fields():
    """Columns shared by farmers and organic farmers."""
    return [
        ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
        ('surname', models.CharField(max_length=100)),
        ('first_name', models.CharField(max_length=100)),
        ('middle_name', models.CharField(blank=True, max_length=100)),
        ('extension_name', models.CharField(blank=True, help_text='Jr., Sr., III', max_length=20)),
        ('sex', models.CharField(choices=[('MALE', 'Male'), ('FEMALE', 'Female')], max_length=10)),
        ('house_lot_building_no', models.CharField(max_length=100)),
        ('street_sitio_subdivision', models.CharField(max_length=150)),
        ('barangay', models.CharField(db_index=True, max_length=100)),
        ('municipality_city', models.CharField(db_index=True, max_length=100)),
        ('province', models.CharField(db_index=True, max_length=100)),
        ('region', models.CharField(max_length=100)),
        ('contact_number', models.CharField(help_text='Mobile number; SMS is only sent to 09XXXXXXXXX numbers', max_length=20)),
        ('place_of_birth', models.CharField(max_length=150)),
        ('date_of_birth', models.DateField()),
        ('highest_education', models.CharField(choices=[('NONE', 'None'), ('ELEMENTARY', 'Elementary'), ('HIGHSCHOOL', 'High School'), ('SENIOR_HIGHSCHOOL', 'Senior High School'), ('COLLEGE', 'College'), ('POST_GRADUATE', 'Post Graduate'), ('VOCATIONAL', 'Vocational')], max_length=20)),
        ('religion', models.CharField(blank=True, max_length=100)),
        ('civil_status', models.CharField(choices=[('SINGLE', 'Single'), ('MARRIED', 'Married'), ('WIDOWED', 'Widowed'), ('SEPARATED', 'Separated')], max_length=20)),
        ('four_ps_beneficiary', models.CharField(blank=True, help_text='4Ps household id, if a beneficiary', max_length=100)),
        ('mothers_name', models.CharField(blank=True, max_length=150)),
        ('fathers_name', models.CharField(blank=True, max_length=150)),
        ('government_id', models.CharField(max_length=100)),
        ('emergency_contact_person', models.CharField(blank=True, max_length=150)),
        ('emergency_contact_number', models.CharField(blank=True, max_length=20)),
        ('gross_income_farming', models.DecimalField(decimal_places=2, default=0, max_digits=14, validators=[django.core.validators.MinValueValidator(0)])),
        ('gross_income_non_farming', models.DecimalField(decimal_places=2, default=0, max_digits=14, validators=[django.core.validators.MinValueValidator(0)])),
        ('farmer_image', models.TextField()),
        ('status', models.CharField(choices=STATUS_CHOICES, db_index=True, default='APPLICANTS', max_length=20)),
        ('not_qualified_reason', models.TextField(blank=True)),
        ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
        ('updated_at', models.DateTimeField(auto_now=True)),
    ]


def business_role_field():
    return models.CharField(choices=BUSINESS_ROLE_CHOICES, default='NOT_APPLICABLE', max_length=20)


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Farmer',
            fields=registrant_fields() + [
                ('spouse_name', models.CharField(blank=True, max_length=150)),
                ('farmer_signature', models.TextField(blank=True)),
                ('farmer_fingerprint', models.TextField(blank=True)),
                ('category_type', models.CharField(choices=[('FARMER', 'Farmer'), ('FARMWORKER', 'Farmworker/Laborer'), ('FISHERFOLK', 'Fisherfolk'), ('AGRI_YOUTH', 'Agri Youth')], db_index=True, max_length=20)),
                ('number_of_farms', models.PositiveIntegerField(default=0)),
                ('user', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='farmer_profile', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'farmers',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['status', 'created_at'], name='farmers_status_created_idx'),
                    models.Index(fields=['surname', 'first_name'], name='farmers_name_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='CropFarmingDetails',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('rice', models.BooleanField(default=False)),
                ('corn', models.BooleanField(default=False)),
                ('other_crops', models.CharField(blank=True, max_length=255)),
                ('livestock', models.BooleanField(default=False)),
                ('livestock_details', models.CharField(blank=True, max_length=255)),
                ('poultry', models.BooleanField(default=False)),
                ('poultry_details', models.CharField(blank=True, max_length=255)),
                ('farmer', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='crop_details', to='farmers.farmer')),
            ],
            options={'db_table': 'farmer_crop_details'},
        ),
        migrations.CreateModel(
            name='FarmworkerDetails',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('land_preparation', models.BooleanField(default=False)),
                ('planting_transplanting', models.BooleanField(default=False)),
                ('cultivation', models.BooleanField(default=False)),
                ('harvesting', models.BooleanField(default=False)),
                ('others', models.CharField(blank=True, max_length=255)),
                ('farmer', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='farmworker_details', to='farmers.farmer')),
            ],
            options={'db_table': 'farmworker_details'},
        ),
        migrations.CreateModel(
            name='FisherfolkDetails',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('fish_capture', models.BooleanField(default=False)),
                ('aquaculture', models.BooleanField(default=False)),
                ('gleaning', models.BooleanField(default=False)),
                ('fish_processing', models.BooleanField(default=False)),
                ('fish_vending', models.BooleanField(default=False)),
                ('others', models.CharField(blank=True, max_length=255)),
                ('farmer', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='fisherfolk_details', to='farmers.farmer')),
            ],
            options={'db_table': 'fisherfolk_details'},
        ),
        migrations.CreateModel(
            name='AgriYouthDetails',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('part_of_farming_household', models.BooleanField(default=False)),
                ('attended_formal_agri_fishery', models.BooleanField(default=False)),
                ('attended_non_formal_agri_fishery', models.BooleanField(default=False)),
                ('participated_in_agricultural_activity', models.BooleanField(default=False)),
                ('fish_vending', models.BooleanField(default=False)),
                ('others', models.CharField(blank=True, max_length=255)),
                ('farmer', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='agri_youth_details', to='farmers.farmer')),
            ],
            options={'db_table': 'agri_youth_details'},
        ),
        migrations.CreateModel(
            name='HouseHead',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('household_head', models.CharField(blank=True, max_length=150)),
                ('relationship', models.CharField(blank=True, max_length=100)),
                ('household_members_total', models.PositiveIntegerField(default=0)),
                ('number_of_male', models.PositiveIntegerField(default=0)),
                ('number_of_female', models.PositiveIntegerField(default=0)),
                ('farmer', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='house_head', to='farmers.farmer')),
            ],
            options={'db_table': 'house_heads'},
        ),
        migrations.CreateModel(
            name='FarmParcel',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('location', models.CharField(max_length=255)),
                ('total_area_ha', models.DecimalField(decimal_places=2, help_text='Total farm area in hectares', max_digits=10, validators=[django.core.validators.MinValueValidator(0)])),
                ('within_ancestral_domain', models.BooleanField(default=False)),
                ('agrarian_reform_beneficiary', models.BooleanField(default=False)),
                ('ownership_document_number', models.CharField(max_length=100)),
                ('registered_owner', models.BooleanField(default=False)),
                ('owner_name', models.CharField(blank=True, max_length=150)),
                ('tenant', models.BooleanField(default=False)),
                ('tenant_name', models.CharField(blank=True, max_length=150)),
                ('lessee', models.BooleanField(default=False)),
                ('lessee_name', models.CharField(blank=True, max_length=150)),
                ('ownership_others', models.CharField(blank=True, max_length=150)),
                ('ownership_others_details', models.CharField(blank=True, max_length=255)),
                ('farmer', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='parcels', to='farmers.farmer')),
            ],
            options={'db_table': 'farm_parcels', 'ordering': ['id']},
        ),
        migrations.CreateModel(
            name='LotDetail',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('crop_or_commodity', models.CharField(blank=True, max_length=150)),
                ('size_ha', models.DecimalField(decimal_places=2, default=0, max_digits=10, validators=[django.core.validators.MinValueValidator(0)])),
                ('head_count', models.PositiveIntegerField(default=0, help_text='Number of head for livestock and poultry')),
                ('farm_type', models.CharField(blank=True, max_length=100)),
                ('organic_practitioner', models.BooleanField(default=False)),
                ('parcel', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='lot', to='farmers.farmparcel')),
            ],
            options={'db_table': 'lot_details'},
        ),
        migrations.CreateModel(
            name='OrganicFarmer',
            fields=registrant_fields() + [
                ('has_organic_certification', models.BooleanField(default=False)),
                ('certification', models.CharField(blank=True, choices=[('THIRD_PARTY_CERTIFICATION', 'Third Party Certification'), ('PARTICIPATORY_GUARANTEE_SYSTEM', 'Participatory Guarantee System')], max_length=40)),
                ('certification_stage', models.CharField(blank=True, max_length=255)),
                ('production_for_inputs', business_role_field()),
                ('production_for_food', business_role_field()),
                ('post_harvest_processing', business_role_field()),
                ('trading_wholesale', business_role_field()),
                ('retailing', business_role_field()),
                ('transport_logistics', business_role_field()),
                ('warehousing', business_role_field()),
                ('business_others', models.CharField(blank=True, max_length=255)),
                ('direct_to_consumer', models.BooleanField(default=False)),
                ('trader', models.BooleanField(default=False)),
                ('trader_type', models.CharField(blank=True, max_length=150)),
                ('retailer', models.BooleanField(default=False)),
                ('institutional_buyer', models.BooleanField(default=False)),
                ('institutional_buyer_type', models.CharField(blank=True, max_length=150)),
                ('international_buyer', models.BooleanField(default=False)),
                ('international_buyer_type', models.CharField(blank=True, max_length=150)),
                ('market_others', models.CharField(blank=True, max_length=255)),
                ('other_commodity', models.CharField(blank=True, max_length=255)),
                ('user', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='organic_farmer_profile', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'organic_farmers',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['status', 'created_at'], name='organic_status_created_idx'),
                    models.Index(fields=['surname', 'first_name'], name='organic_name_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='AgriculturalCommodity',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('commodity_type', models.CharField(choices=[('Grains', 'Grains'), ('LowlandVegetables', 'Lowland Vegetables'), ('UplandVegetables', 'Upland Vegetables'), ('FruitsAndNuts', 'Fruits and Nuts'), ('Mushroom', 'Mushroom'), ('OrganicSoil', 'Organic Soil Amendments'), ('Rootcrops', 'Rootcrops'), ('PoultryProducts', 'Poultry Products'), ('LivestockProducts', 'Livestock Products'), ('FisheriesAndAquaculture', 'Fisheries and Aquaculture'), ('IndustrialCropsAndProducts', 'Industrial Crops and Products'), ('OtherCommodity', 'Other Commodity')], db_index=True, max_length=40)),
                ('name', models.CharField(max_length=150)),
                ('size_ha', models.DecimalField(decimal_places=2, default=0, max_digits=10, validators=[django.core.validators.MinValueValidator(0)])),
                ('annual_volume_kg', models.PositiveIntegerField(default=0)),
                ('certification', models.CharField(blank=True, max_length=150)),
                ('organic_farmer', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='commodities', to='farmers.organicfarmer')),
            ],
            options={
                'db_table': 'agricultural_commodities',
                'ordering': ['commodity_type', 'id'],
                'verbose_name_plural': 'Agricultural commodities',
            },
        ),
        migrations.CreateModel(
            name='OwnSharedFacility',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('equipment', models.CharField(help_text='Facility, machinery or equipment used', max_length=150)),
                ('ownership', models.CharField(max_length=100)),
                ('model', models.CharField(max_length=100)),
                ('quantity', models.CharField(max_length=50)),
                ('service_area', models.CharField(help_text='Volume of services / area covered', max_length=150)),
                ('working_hours_per_day', models.CharField(max_length=50)),
                ('remarks', models.CharField(blank=True, max_length=255)),
                ('dedicated_to_organic', models.BooleanField(default=False)),
                ('organic_farmer', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='facilities', to='farmers.organicfarmer')),
            ],
            options={
                'db_table': 'own_shared_facilities',
                'ordering': ['id'],
                'verbose_name_plural': 'Own/shared facilities',
            },
        ),
        migrations.CreateModel(
            name='ApplicantNotification',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('channel', models.CharField(choices=[('email', 'Email'), ('sms', 'SMS')], db_index=True, max_length=10)),
                ('recipient', models.CharField(max_length=254)),
                ('applicant_status', models.CharField(choices=STATUS_CHOICES, help_text='Status the message announced', max_length=20)),
                ('subject', models.CharField(blank=True, max_length=200)),
                ('message', models.TextField()),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('sent', 'Sent'), ('failed', 'Failed')], db_index=True, default='pending', max_length=10)),
                ('sent_at', models.DateTimeField(blank=True, null=True)),
                ('failed_at', models.DateTimeField(blank=True, null=True)),
                ('failure_reason', models.TextField(blank=True)),
                ('provider_message_id', models.CharField(blank=True, help_text='Gateway id for SMS batches', max_length=100)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('farmer', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name='notifications', to='farmers.farmer')),
                ('organic_farmer', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name='notifications', to='farmers.organicfarmer')),
            ],
            options={
                'db_table': 'applicant_notifications',
                'ordering': ['-created_at'],
                'indexes': [models.Index(fields=['channel', 'status'], name='notif_channel_status_idx')],
            },
        ),
    ]
