import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Operator',
            fields=[
                ('name', models.CharField(max_length=255, primary_key=True, serialize=False)),
                ('address', models.CharField(blank=True, default='', max_length=255)),
                ('phone_number', models.CharField(max_length=32)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('principal', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='operators', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'operators',
            },
        ),
    ]
