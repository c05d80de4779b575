import uuid
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("auth", "0012_alter_user_first_name_max_length"),
    ]

    operations = [
        migrations.CreateModel(
            name="Account",
            fields=[
                ("password",     models.CharField(max_length=128, verbose_name="password")),
                ("last_login",   models.DateTimeField(blank=True, null=True, verbose_name="last login")),
                ("is_superuser", models.BooleanField(
                    default=False,
                    help_text="Designates that this user has all permissions without explicitly assigning them.",
                    verbose_name="superuser status",
                )),
                ("id",         models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("email",      models.EmailField(max_length=254, unique=True)),
                ("first_name", models.CharField(max_length=60)),
                ("last_name",  models.CharField(max_length=60)),
                ("phone",      models.CharField(blank=True, max_length=20)),
                ("address",    models.TextField(blank=True)),
                ("role", models.CharField(
                    choices=[
                        ("customer", "Customer"),
                        ("employee", "Employee"),
                        ("admin",    "Administrator"),
                    ],
                    default="customer",
                    max_length=10,
                )),
                ("status", models.CharField(
                    choices=[
                        ("active",   "Active"),
                        ("inactive", "Inactive"),
                        ("pending",  "Pending Approval"),
                    ],
                    default="active",
                    max_length=10,
                )),
                ("is_staff",   models.BooleanField(default=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("groups", models.ManyToManyField(
                    blank=True,
                    help_text="The groups this user belongs to. A user will get all permissions granted to each of their groups.",
                    related_name="user_set",
                    related_query_name="user",
                    to="auth.group",
                    verbose_name="groups",
                )),
                ("user_permissions", models.ManyToManyField(
                    blank=True,
                    help_text="Specific permissions for this user.",
                    related_name="user_set",
                    related_query_name="user",
                    to="auth.permission",
                    verbose_name="user permissions",
                )),
            ],
            options={
                "verbose_name": "Account",
                "ordering": ["-created_at"],
            },
        ),
        migrations.AddIndex(
            model_name="account",
            index=models.Index(fields=["role"], name="account_role_idx"),
        ),
        migrations.AddIndex(
            model_name="account",
            index=models.Index(fields=["status"], name="account_status_idx"),
        ),
    ]
