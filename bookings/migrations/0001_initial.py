import django.core.validators
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
    ]

    operations = [
        migrations.CreateModel(
            name='Ticket',
            fields=[
                ('id', models.CharField(max_length=36, primary_key=True, serialize=False)),
                ('train_id', models.CharField(max_length=36)),
                ('user_id', models.CharField(max_length=36)),
                ('number_of_seats', models.PositiveIntegerField(validators=[django.core.validators.MinValueValidator(1)])),
                ('booking_date', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'db_table': 'tickets',
                'indexes': [models.Index(fields=['train_id'], name='tickets_train_idx'), models.Index(fields=['user_id'], name='tickets_user_idx')],
            },
        ),
    ]
