"""Mutation resolvers for daily goals domain.

These resolvers execute CQRS commands:
- calculate: Calculate and store goals
- updateProfile: Save goal-relevant profile fields and schedule recalculation
"""

import strawberry

from application.daily_goals.commands.calculate_goals import CalculateGoalsCommand
from domain.daily_goals.core.value_objects.activity_level import ActivityLevel
from domain.daily_goals.core.value_objects.gender import Gender
from domain.daily_goals.core.value_objects.goal_profile import GoalProfile
from graphql_api.resolvers.daily_goals.mappers import map_error, map_goals
from graphql_api.types_daily_goals import (
    CalculateGoalsPayload,
    GoalProfileInput,
    UpdateGoalProfilePayload,
)


@strawberry.type
class DailyGoalsMutations:
    """Mutations for daily goals operations."""

    @strawberry.mutation
    async def calculate(
        self,
        info: strawberry.types.Info,
        user_id: str,
        force_recalculation: bool = False,
    ) -> CalculateGoalsPayload:
        """Calculate and store daily goals for a user.

        Example:
            mutation {
              dailyGoals {
                calculate(userId: "user123", forceRecalculation: true) {
                  success
                  wasRecalculated
                  goals { stepsGoal caloriesGoal heartPointsGoal }
                  error { kind message retryable issues }
                }
              }
            }
        """
        context = info.context
        handler = context.get("calculate_handler")
        if not handler:
            raise Exception("Missing calculate_handler in GraphQL context")

        result = await handler.handle(
            CalculateGoalsCommand(user_id=user_id, force_recalculation=force_recalculation)
        )

        explanation = None
        fallback_generator = context.get("fallback_generator")
        if result.fallback_goals is not None and fallback_generator is not None:
            cause = getattr(result.error, "cause", None)
            reason = fallback_generator.reason_for(cause) if cause is not None else None
            explanation = fallback_generator.explanation(reason)

        return CalculateGoalsPayload(
            success=result.is_success,
            was_recalculated=result.was_recalculated,
            is_durable=result.is_durable,
            goals=map_goals(result.goals),
            fallback_goals=map_goals(result.fallback_goals),
            fallback_explanation=explanation,
            error=map_error(result.error),
        )

    @strawberry.mutation
    async def update_profile(
        self,
        info: strawberry.types.Info,
        input: GoalProfileInput,
    ) -> UpdateGoalProfilePayload:
        """Save goal-relevant profile fields.

        A recalculation is scheduled (debounced) when goal-affecting fields
        changed.

        Example:
            mutation {
              dailyGoals {
                updateProfile(input: {
                  userId: "user123"
                  birthdate: "1995-04-12"
                  gender: MALE
                  heightCm: 180.0
                  weightKg: 75.0
                  activityLevel: MODERATE
                }) {
                  recalculationScheduled
                  triggerReason
                }
              }
            }
        """
        context = info.context
        profile_source = context.get("profile_source")
        trigger_service = context.get("trigger_service")

        if not all([profile_source, trigger_service]):
            raise Exception("Missing dependencies in GraphQL context")

        profile = GoalProfile(
            user_id=input.user_id,
            birthdate=input.birthdate,
            gender=Gender(input.gender.value),
            height_cm=input.height_cm,
            weight_kg=input.weight_kg,
            activity_level=ActivityLevel(input.activity_level.value),
            steps_goal_override=input.steps_goal_override,
            calories_goal_override=input.calories_goal_override,
            heart_points_goal_override=input.heart_points_goal_override,
        )

        previous = await profile_source.save_profile(profile)
        reason = await trigger_service.on_profile_updated(previous, profile)

        return UpdateGoalProfilePayload(
            user_id=profile.user_id,
            recalculation_scheduled=reason is not None,
            trigger_reason=reason,
        )
