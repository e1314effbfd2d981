from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Room",
            fields=[
                ("identifier", models.PositiveSmallIntegerField(primary_key=True, serialize=False)),
                ("uid", models.CharField(max_length=64, unique=True)),
                ("layout", models.JSONField()),
                ("screen_size", models.PositiveSmallIntegerField()),
                ("screen_type", models.CharField(max_length=10)),
                (
                    "status",
                    models.CharField(
                        choices=[("AVAILABLE", "Available"), ("CLOSED", "Closed")],
                        default="AVAILABLE",
                        max_length=20,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["identifier"],
            },
        ),
        migrations.CreateModel(
            name="Booking",
            fields=[
                ("booking_uid", models.CharField(max_length=64, primary_key=True, serialize=False)),
                ("screening_uid", models.CharField(blank=True, max_length=64, null=True)),
                ("start_time", models.DateTimeField()),
                ("end_time", models.DateTimeField()),
                (
                    "type",
                    models.CharField(
                        choices=[
                            ("SCREENING", "Screening"),
                            ("CLEANING", "Cleaning"),
                            ("MAINTENANCE", "Maintenance"),
                            ("EXIT_TIME", "Exit Time"),
                            ("ENTRY_TIME", "Entry Time"),
                        ],
                        max_length=20,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "room",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="bookings",
                        to="rooms.room",
                    ),
                ),
            ],
            options={
                "ordering": ["start_time"],
                "indexes": [
                    models.Index(fields=["room", "start_time"], name="rooms_booking_room_start_idx"),
                    models.Index(fields=["screening_uid"], name="rooms_booking_screening_idx"),
                ],
            },
        ),
    ]
