from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
    ]

    operations = [
        migrations.CreateModel(
            name='Train',
            fields=[
                ('id', models.CharField(max_length=36, primary_key=True, serialize=False)),
                ('operator', models.CharField(max_length=255)),
                ('name', models.CharField(max_length=255, unique=True)),
                ('image', models.CharField(blank=True, default='', max_length=500)),
                ('departure_time', models.CharField(max_length=64)),
                ('arrival_time', models.CharField(max_length=64)),
                ('time_taken', models.CharField(max_length=64)),
                ('price', models.PositiveBigIntegerField()),
                ('available_seats', models.PositiveIntegerField()),
                ('booked_seats', models.PositiveIntegerField(default=0)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'db_table': 'trains',
                'indexes': [models.Index(fields=['operator'], name='trains_operator_idx')],
            },
        ),
    ]
