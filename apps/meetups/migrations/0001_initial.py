import uuid

import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('groups', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Meetup',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('title', models.CharField(max_length=200)),
                ('description', models.TextField(blank=True)),
                ('meetup_picture', models.URLField(blank=True, max_length=500)),
                ('max_participants', models.PositiveSmallIntegerField(default=32767, validators=[django.core.validators.MinValueValidator(1), django.core.validators.MaxValueValidator(32767)])),
                ('difficulty', models.CharField(choices=[('BEGINNER', 'Beginner'), ('INTERMEDIATE', 'Intermediate'), ('ADVANCED', 'Advanced')], default='BEGINNER', max_length=20)),
                ('terrain_types', models.JSONField(blank=True, default=list)),
                ('distance_km', models.DecimalField(blank=True, decimal_places=2, max_digits=8, null=True)),
                ('estimated_duration_min', models.PositiveIntegerField(blank=True, null=True)),
                ('meeting_time', models.DateTimeField()),
                ('latitude', models.DecimalField(decimal_places=6, max_digits=9, validators=[django.core.validators.MinValueValidator(-90), django.core.validators.MaxValueValidator(90)])),
                ('longitude', models.DecimalField(decimal_places=6, max_digits=9, validators=[django.core.validators.MinValueValidator(-180), django.core.validators.MaxValueValidator(180)])),
                ('status', models.CharField(choices=[('WAITING', 'Waiting'), ('CURRENT', 'Current'), ('FINISHED', 'Finished'), ('CANCELLED', 'Cancelled')], default='WAITING', max_length=20)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('group', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='meetups', to='groups.group')),
                ('host', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='hosted_meetups', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'meetups',
                'ordering': ['meeting_time'],
                'indexes': [
                    models.Index(fields=['group', 'status'], name='meetup_group_status_idx'),
                    models.Index(fields=['host'], name='meetup_host_idx'),
                    models.Index(fields=['meeting_time'], name='meetup_meeting_time_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='MeetupParticipation',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('joined_at', models.DateTimeField(auto_now_add=True)),
                ('meetup', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='participations', to='meetups.meetup')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='meetup_participations', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'meetup_participations',
                'ordering': ['joined_at'],
                'unique_together': {('meetup', 'user')},
            },
        ),
    ]
