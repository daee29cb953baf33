import uuid

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='FileRecord',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('display_name', models.CharField(max_length=255)),
                ('extension', models.CharField(blank=True, default='', help_text='Suffix without the dot, set once at creation', max_length=32)),
                ('physical_location', models.CharField(editable=False, help_text='Name of the object in blob storage', max_length=512)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'verbose_name': 'File record',
                'verbose_name_plural': 'File records',
            },
        ),
        migrations.CreateModel(
            name='Link',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('kind', models.CharField(choices=[('ROOT', 'Root'), ('FOLDER', 'Folder'), ('FILE', 'File'), ('TRASH', 'Trash')], max_length=16)),
                ('display_name', models.CharField(max_length=255)),
                ('parent_id', models.UUIDField(blank=True, db_index=True, null=True)),
                ('target_file_id', models.UUIDField(blank=True, db_index=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'verbose_name': 'Link',
                'verbose_name_plural': 'Links',
            },
        ),
    ]
